#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Read workflow trace tables (Nextflow trace.txt and friends).

The table is tab separated, the first line is the header and must contain
a column literally called "duration".  No quoting rules – plain tab split.
"""

from pathlib import Path
from typing import NamedTuple
import logging

from trace_duration_utils import ParseError, parse_duration

log = logging.getLogger(__name__)

DURATION_COL = "duration"


class FormatError(ValueError):
    """The trace file has no usable header or no duration column."""


class TraceSummary(NamedTuple):
    path: Path
    total_ns: int
    rows_parsed: int
    rows_short: int
    rows_failed: int


# ------------------------------------------------------------------
def find_column(header: str, name: str = DURATION_COL) -> int:
    """Zero-based index of the first header field equal to *name*."""
    columns = header.split("\t")
    try:
        return columns.index(name)
    except ValueError:
        raise FormatError(f"{name} column not found") from None


def summarise_trace(path) -> TraceSummary:
    """
    Single pass over *path*, summing the duration column.

    Rows with too few fields are skipped silently, rows whose duration
    cannot be parsed are logged and skipped.  Missing header / column raise
    FormatError, I/O problems propagate as OSError.
    """
    path = Path(path)
    log.debug("reading trace %s", path)

    total = parsed = short = failed = 0
    with path.open(encoding="utf-8", errors="replace", newline="\n") as fh:
        header = fh.readline()
        if not header:
            raise FormatError("missing header")
        idx = find_column(header.rstrip("\r\n"))

        for line in fh:
            fields = line.rstrip("\r\n").split("\t")
            if len(fields) <= idx:
                short += 1
                continue

            raw = fields[idx]
            try:
                total += parse_duration(raw)
            except ParseError as exc:
                log.warning("error parsing duration %r: %s", raw, exc)
                failed += 1
                continue
            parsed += 1

    log.debug("%s | parsed=%d  short=%d  failed=%d", path.name, parsed, short, failed)
    return TraceSummary(path, total, parsed, short, failed)


def sum_durations(path) -> int:
    """Total of the duration column of *path*, in nanoseconds."""
    return summarise_trace(path).total_ns
