from __future__ import annotations

from typing import Callable

from .errors import ConfigError

BOLD = "bold"
UNDERLINE = "underline"

Emphasize = Callable[[str, str], str]

_ANSI_CODES = {
    BOLD: "\x1b[1m",
    UNDERLINE: "\x1b[4m",
}
_ANSI_RESET = "\x1b[0m"

_MARKUP_TAGS = {
    BOLD: "b",
    UNDERLINE: "u",
}


def _check_kind(kind: str) -> None:
    if kind not in (BOLD, UNDERLINE):
        raise ValueError(f"Unknown emphasis kind: {kind}")


def ansi_emphasize(text: str, kind: str) -> str:
    _check_kind(kind)
    return f"{_ANSI_CODES[kind]}{text}{_ANSI_RESET}"


def markup_emphasize(text: str, kind: str) -> str:
    _check_kind(kind)
    tag = _MARKUP_TAGS[kind]
    return f"<{tag}>{text}</{tag}>"


def plain_emphasize(text: str, kind: str) -> str:
    _check_kind(kind)
    return text


STYLES: dict[str, Emphasize] = {
    "ansi": ansi_emphasize,
    "markup": markup_emphasize,
    "plain": plain_emphasize,
}


def get_emphasizer(name: str) -> Emphasize:
    try:
        return STYLES[name]
    except KeyError:
        supported = ", ".join(STYLES)
        raise ConfigError(f"Unknown style: {name}. Supported styles: {supported}") from None
