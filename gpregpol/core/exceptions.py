# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _clamp_exit_code(code: int) -> int:
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    # Stable order, single-line.
    return ", ".join(f"{k}={ctx[k]!r}" for k in sorted(ctx.keys()))


@dataclass(eq=False)
class RegPolError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - an exit code the CLI honors
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "RegPolError":
        if self.context is None:
            self.context = {}
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context))}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": self.context or {},
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


@dataclass(eq=False)
class ParseError(RegPolError):
    """
    Decoding failed at a byte offset of the input buffer.

    `offset` is None when the failure is not tied to a buffer position
    (e.g. an unsupported kind met while encoding).
    """
    code: int = 2
    offset: Optional[int] = None
    kind: str = "parse_error"

    def __post_init__(self) -> None:
        super().__post_init__()
        self.with_context(kind=self.kind)
        if self.offset is not None:
            self.with_context(offset=self.offset)

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        base = super().user_message(include_context=include_context, include_cause=include_cause)
        if self.offset is None or include_context:
            return base
        return f"{base} (at offset {self.offset})"


@dataclass(eq=False)
class HeaderError(ParseError):
    """Bad signature or version in the 8-byte file header."""
    kind: str = "invalid_signature"


@dataclass(eq=False)
class MalformedEntry(ParseError):
    """Missing bracket, semicolon or null terminator inside an entry."""
    kind: str = "malformed_entry"


@dataclass(eq=False)
class UnsupportedValueType(ParseError):
    """A value type with no data representation carries a payload."""
    kind: str = "unsupported_value_type"


@dataclass(eq=False)
class InvalidIntegerSize(RegPolError):
    code: int = 3
    size: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()
        self.with_context(size=self.size)


@dataclass(eq=False)
class InvalidRecord(RegPolError):
    """A PolicyRecord whose data does not fit its declared value type."""
    code: int = 4


@dataclass(eq=False)
class PolFileError(RegPolError):
    """Reading or writing a .pol file failed."""
    code: int = 5


@dataclass(eq=False)
class PathConflict(PolFileError):
    """Destination exists and overwriting was not allowed."""
    code: int = 6


@dataclass(eq=False)
class ConfigError(RegPolError):
    code: int = 7


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, RegPolError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
