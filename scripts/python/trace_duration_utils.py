#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Duration helpers shared by the trace summary scripts.

Workflow engines write task runtimes as human strings:
  – single value+unit  ( "42.9s", "500ms", "3.5d" )
  – composite          ( "1h 21m 27s" )
Everything is converted to an integer count of nanoseconds.
"""

import math
import re

# ------------------------------------------------------------------
NANOSECOND  = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND      = 1_000 * MILLISECOND
MINUTE      = 60 * SECOND
HOUR        = 60 * MINUTE
DAY         = 24 * HOUR

# largest value a signed 64-bit nanosecond counter can hold
MAX_NS = 2**63 - 1

_UNIT_ALIASES = {
    NANOSECOND:  ("ns", "nanosecond", "nanoseconds"),
    # µ as U+00B5, μ as U+03BC, and UTF-8 µ read back as latin-1
    MICROSECOND: ("us", "µs", "μs", "Âµs",
                  "microsecond", "microseconds"),
    MILLISECOND: ("ms", "millisecond", "milliseconds"),
    SECOND:      ("s", "sec", "second", "seconds"),
    MINUTE:      ("m", "min", "minute", "minutes"),
    HOUR:        ("h", "hr", "hour", "hours"),
    DAY:         ("d", "day", "days"),
}
UNIT_SCALE = {alias.lower(): scale
              for scale, aliases in _UNIT_ALIASES.items()
              for alias in aliases}

# number: "12", "12.", "12.5", ".5"   unit: any run of letters
_TOKEN_RE = re.compile(r"\s*([0-9]+(?:\.[0-9]*)?|\.[0-9]+)\s*([^\W\d_]+)")


class ParseError(ValueError):
    """A duration string (or one of its tokens) cannot be interpreted."""

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.token = token


# ------------------------------------------------------------------
def _parse_token(token: str) -> int:
    m = _TOKEN_RE.fullmatch(token)
    if m is None:
        raise ParseError(f"unsupported duration format: {token!r}", token)

    value_str, unit = m.groups()
    scale = UNIT_SCALE.get(unit.lower())
    if scale is None:
        raise ParseError(f"unknown time unit: {unit}", token)

    scaled = float(value_str) * scale
    if not math.isfinite(scaled) or scaled > MAX_NS:
        raise ParseError(f"duration out of range: {token!r}", token)
    return int(scaled)


def parse_duration(text: str) -> int:
    """
    Parse *text* into nanoseconds.

    The whole string is tried as one value+unit pair first ("5 s" is fine);
    failing that it is split on whitespace and every token must parse on
    its own.  Each token is truncated to whole nanoseconds before summing,
    so "0.5ns 0.5ns" is 0, not 1.
    """
    try:
        return _parse_token(text)
    except ParseError:
        tokens = text.split()
        if not tokens:
            raise ParseError("empty duration string", text) from None

    return sum(_parse_token(tok) for tok in tokens)


# ------------------------------------------------------------------
def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{frac:0{width}d}".rstrip("0")


def format_duration(ns: int) -> str:
    """Compact form, e.g. 1h30m0s, 42.9s, 500ms, 1.5µs, 0s."""
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < SECOND:
        if ns < MICROSECOND:
            return f"{sign}{ns}ns"
        if ns < MILLISECOND:
            return f"{sign}{_with_fraction(ns, MICROSECOND)}µs"
        return f"{sign}{_with_fraction(ns, MILLISECOND)}ms"

    hours, rest = divmod(ns, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    secs = _with_fraction(rest, SECOND) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}"
    if minutes:
        return f"{sign}{minutes}m{secs}"
    return sign + secs


def format_hms(ns: int) -> str:
    hours = ns // HOUR
    minutes = ns // MINUTE % 60
    secs = ns // SECOND % 60
    return f"{hours}h {minutes}m {secs}s"


def to_minutes(ns: int) -> float:
    return ns / MINUTE
