from __future__ import annotations

import codecs
import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any

from .aggregate import TOP_EXPENSES
from .errors import ConfigError
from .style import STYLES

DEFAULT_CONFIG: dict[str, Any] = {
    "report": {
        "style": "ansi",
        "top_expenses": TOP_EXPENSES,
    },
    "input": {
        "encoding": "utf-8",
    },
    "run": {
        "fail_fast": True,
    },
    "logging": {
        "level": "WARNING",
        "redact": False,
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def expand_path(value: str | Path) -> Path:
    expanded = os.path.expandvars(os.path.expanduser(str(value)))
    path = Path(expanded)
    if path.is_absolute():
        return path
    return Path.cwd() / path


def _coerce_scalar(raw: str) -> Any:
    value = raw.strip()
    if value == "":
        return ""
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    if value.lower() in {"null", "none"}:
        return None
    if (value.startswith("\"") and value.endswith("\"")) or (
        value.startswith("'") and value.endswith("'")
    ):
        return value[1:-1]
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def _strip_comment(line: str) -> str:
    # Trailing "# ..." comments, outside of quoted values.
    quote = None
    for idx, char in enumerate(line):
        if char in "\"'":
            if quote is None:
                quote = char
            elif quote == char:
                quote = None
        elif char == "#" and quote is None and (idx == 0 or line[idx - 1] == " "):
            return line[:idx].rstrip()
    return line


def _parse_simple_yaml(text: str) -> dict[str, Any]:
    lines = [
        _strip_comment(line.rstrip("\n"))
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]

    def _indent(line: str) -> int:
        return len(line) - len(line.lstrip(" "))

    def parse_block(start: int, indent: int) -> tuple[dict[str, Any], int]:
        if start >= len(lines):
            return {}, start

        obj: dict[str, Any] = {}
        idx = start
        while idx < len(lines):
            line = lines[idx]
            current_indent = _indent(line)
            if current_indent < indent:
                break
            if current_indent > indent:
                raise ConfigError(f"Unexpected indentation: {line}")
            stripped = line.strip()
            if ":" not in stripped:
                raise ConfigError(f"Invalid YAML line: {line}")
            key, value = stripped.split(":", 1)
            key = key.strip()
            value = value.strip()
            idx += 1
            if value == "":
                child, idx = parse_block(idx, indent + 2)
                obj[key] = child
            else:
                obj[key] = _coerce_scalar(value)
        return obj, idx

    parsed, _ = parse_block(0, 0)
    return parsed


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(cfg: dict[str, Any]) -> dict[str, Any]:
    for section in DEFAULT_CONFIG:
        if not isinstance(cfg.get(section), dict):
            raise ConfigError(f"{section} must be a mapping")

    style = cfg["report"].get("style")
    if style not in STYLES:
        raise ConfigError(f"report.style must be one of {', '.join(STYLES)}, got {style!r}")

    top = cfg["report"].get("top_expenses")
    if isinstance(top, bool) or not isinstance(top, int) or top < 1:
        raise ConfigError(f"report.top_expenses must be a positive integer, got {top!r}")

    encoding = cfg["input"].get("encoding")
    try:
        codecs.lookup(str(encoding))
    except LookupError:
        raise ConfigError(f"input.encoding is not a known codec: {encoding!r}") from None

    level = str(cfg["logging"].get("level", "")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    cfg["logging"]["level"] = level

    if not isinstance(cfg["run"].get("fail_fast"), bool):
        raise ConfigError("run.fail_fast must be true or false")
    return cfg


def load_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return deepcopy(DEFAULT_CONFIG)

    text = config_path.read_text(encoding="utf-8", errors="ignore")
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError:
        loaded = _parse_simple_yaml(text)
    if not isinstance(loaded, dict):
        raise ConfigError("config file must contain an object at root")
    return deep_merge(DEFAULT_CONFIG, loaded)
