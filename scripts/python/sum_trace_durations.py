#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Total elapsed time of a workflow trace file.

Usage:
    python sum_trace_durations.py -i trace.txt [-o summary.tsv]
    python sum_trace_durations.py -t

As a Snakemake `script:` it reads snakemake.input[0] and writes the
one-row summary table to snakemake.output[0].
"""

from pathlib import Path
import argparse
import logging
import sys

import pandas as pd

from trace_duration_utils import (
    format_duration, format_hms, parse_duration, to_minutes, SECOND,
)
from trace_duration_io import FormatError, TraceSummary, summarise_trace

DEMO_DURATIONS = [
    "3.5d",
    "21h 40m 51s",
    "1h 21m 27s",
    "2m",
    "1m 53s",
    "42.9s",
    "500ms",
]

SUMMARY_COLUMNS = ["path", "total_ns", "total_seconds", "total_minutes",
                   "rows_parsed", "rows_short", "rows_failed"]


# ------------------------------------------------------------------
def write_summary(summary: TraceSummary, out_tsv) -> Path:
    out = Path(out_tsv)
    out.parent.mkdir(parents=True, exist_ok=True)
    row = {
        "path":          str(summary.path),
        "total_ns":      summary.total_ns,
        "total_seconds": round(summary.total_ns / SECOND, 3),
        "total_minutes": round(to_minutes(summary.total_ns), 2),
        "rows_parsed":   summary.rows_parsed,
        "rows_short":    summary.rows_short,
        "rows_failed":   summary.rows_failed,
    }
    pd.DataFrame([row], columns=SUMMARY_COLUMNS).to_csv(out, sep="\t", index=False)
    logging.info("✓ duration summary → %s", out)
    return out


def run_demo():
    print("Testing duration parsing:")
    print("-" * 31)
    for txt in DEMO_DURATIONS:
        try:
            ns = parse_duration(txt)
        except ValueError as exc:
            print(f"Error parsing '{txt}': {exc}")
            continue
        print(f"Original: {txt:<15s} | Parsed: {format_duration(ns):<15s} "
              f"| Minutes: {to_minutes(ns):.2f}")
    print("-" * 31)


def print_totals(total_ns: int):
    print(f"Total duration: {format_duration(total_ns)}")
    print(f"Total duration: {format_hms(total_ns)}")
    print(f"Total minutes: {to_minutes(total_ns):.2f}")


# ------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Sum the duration column of a tab-separated workflow trace.")
    p.add_argument("-i", "--input", help="path to the trace file")
    p.add_argument("-o", "--out", help="also write a one-row summary TSV here")
    p.add_argument("-t", "--test", action="store_true",
                   help="parse a few sample durations and exit")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.INFO)

    if args.test:
        run_demo()
        return 0

    if not args.input:
        print("Please provide an input file path using -i or --input")
        parser.print_usage(sys.stderr)
        return 1

    try:
        summary = summarise_trace(args.input)
    except (FormatError, OSError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    if summary.rows_failed:
        logging.warning("%d row(s) with unparseable duration skipped", summary.rows_failed)

    print_totals(summary.total_ns)
    if args.out:
        write_summary(summary, args.out)
    return 0


if "snakemake" in globals():
    logging.basicConfig(level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S")
    _summary = summarise_trace(snakemake.input[0])
    print_totals(_summary.total_ns)
    write_summary(_summary, snakemake.output[0])
elif __name__ == "__main__":
    sys.exit(main())
