from __future__ import annotations


class ReportError(Exception):
    pass


class ConfigError(ReportError):
    pass


class ParseError(ReportError):
    def __init__(self, label: str, line_no: int, raw: str, reason: str) -> None:
        super().__init__(f"{label}:{line_no}: {reason}: {raw!r}")
        self.label = label
        self.line_no = line_no
        self.raw = raw
        self.reason = reason


class HeaderError(ParseError):
    def __init__(self, label: str, line_no: int, raw: str) -> None:
        super().__init__(label, line_no, raw, "missing account number")


class AmountError(ParseError):
    def __init__(self, label: str, line_no: int, raw: str) -> None:
        super().__init__(label, line_no, raw, "invalid amount")
