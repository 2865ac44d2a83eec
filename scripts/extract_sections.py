#!/usr/bin/env python3
"""Extract stimulus sections from a tab-separated recording export.

This script reads the timestamp and label columns of an exported recording,
repairs the time column (sort, deduplicate, drop missing), shifts it to
start at 0 ms and extracts the labeled sections.

Usage:
    python scripts/extract_sections.py --input recording.tsv
    python scripts/extract_sections.py --input recording.tsv --fs 120 --gap_n_dt 3
    python scripts/extract_sections.py --input recording.tsv --debug --pretty

Example output:
    {
        "repair": {"was_sorted": true, "had_dupes": false, "had_nans": false, "num_dropped": 0},
        "zero_time_ms": 1713441234567.0,
        "num_samples": 6,
        "fs": 1000.0,
        "dt_ms": 1.0,
        "labels": {"name": ["Start_A", "End_A", "Start_A", "End_A"], "t_ms": [0.0, 3.0, 10.0, 13.0]},
        "sections": [{"name": "A", "hit": [[0.0, 3.0], [10.0, 13.0]], "desc": "Section demarked by \\"A\\".", "fs": 1000.0}]
    }
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sections import SectionConfig, extract_sections
from sections.errors import SectionError
from timing.errors import TimingError


DEFAULT_TIME_COLUMN = "Computer timestamp [ms]"
DEFAULT_LABEL_COLUMN = "Presented Stimulus name"


def read_columns(
    path: Path,
    time_column: str,
    label_column: str,
    decimal_comma: bool = False,
) -> tuple[list[float | None], list[str | None]]:
    """Read the timestamp and label columns of a tab-separated file.

    Args:
        path: Path to the export.
        time_column: Header of the timestamp column.
        label_column: Header of the label column.
        decimal_comma: Whether numbers use a comma as decimal separator
            (and a dot as thousands separator).

    Returns:
        Tuple of (timestamps, labels); blank cells become None.

    Raises:
        KeyError: If a column is missing from the header.
        ValueError: If the file cannot be parsed or a timestamp is not numeric.
    """
    header = pd.read_csv(path, sep="\t", nrows=0, encoding="utf-8-sig").columns
    for column in (time_column, label_column):
        if column not in header:
            raise KeyError(f"Column not found: {column!r}")

    df = pd.read_csv(
        path,
        sep="\t",
        usecols=[time_column, label_column],
        dtype={label_column: str},
        decimal="," if decimal_comma else ".",
        thousands="." if decimal_comma else None,
        keep_default_na=False,
        na_values=[""],
        encoding="utf-8-sig",
    )

    times = pd.to_numeric(df[time_column])
    t_ms = [None if pd.isna(t) else float(t) for t in times]
    labels = [
        None if pd.isna(label) or not label.strip() else label.strip()
        for label in df[label_column]
    ]
    return t_ms, labels


def main() -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="Extract stimulus sections from a recording export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --input recording.tsv
    %(prog)s --input recording.tsv --time_column "TimeStamp" --label_column "Event"
    %(prog)s --input recording.tsv --fs 60 --gap_n_dt 3 --pretty
    %(prog)s --input recording.tsv --skip_empty_labels --include_runs
        """,
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Path to the tab-separated recording export",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--pretty", "-p",
        action="store_true",
        help="Pretty-print JSON output with indentation",
    )
    parser.add_argument(
        "--time_column",
        type=str,
        default=DEFAULT_TIME_COLUMN,
        help=f"Timestamp column header (default: {DEFAULT_TIME_COLUMN!r})",
    )
    parser.add_argument(
        "--label_column",
        type=str,
        default=DEFAULT_LABEL_COLUMN,
        help=f"Label column header (default: {DEFAULT_LABEL_COLUMN!r})",
    )
    parser.add_argument(
        "--decimal_comma",
        action="store_true",
        help="Numbers use a comma as decimal separator",
    )
    parser.add_argument(
        "--fs",
        type=float,
        default=None,
        help="Sampling rate in Hz (default: estimated from timestamps)",
    )
    parser.add_argument(
        "--gap_n_dt",
        type=float,
        default=2.0,
        help="Gap threshold in sample periods (default: 2)",
    )
    parser.add_argument(
        "--skip_empty_labels",
        action="store_true",
        help="Treat blank labels as breaks instead of sections",
    )
    parser.add_argument(
        "--no_zero_time",
        action="store_true",
        help="Keep original timestamps instead of starting at 0 ms",
    )
    parser.add_argument(
        "--include_runs",
        action="store_true",
        help="Include the flat list of sections in the output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print the per-sample trace to stderr",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.debug else logging.WARNING,
        stream=sys.stderr,
        format="%(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    try:
        t_ms, labels = read_columns(
            input_path,
            args.time_column,
            args.label_column,
            decimal_comma=args.decimal_comma,
        )
        config = SectionConfig(
            fs=args.fs,
            gap_n_dt=args.gap_n_dt,
            is_debug=args.debug,
            skip_empty_labels=args.skip_empty_labels,
        )
        recording = extract_sections(t_ms, labels, config, zero_time=not args.no_zero_time)
    except (KeyError, ValueError) as e:
        print(f"Error: Could not read {input_path}: {e}", file=sys.stderr)
        return 1
    except TimingError as e:
        print(f"Error: Timestamp error: {e}", file=sys.stderr)
        return 2
    except SectionError as e:
        print(f"Error: Section extraction error: {e}", file=sys.stderr)
        return 3

    indent = 2 if args.pretty else None
    output = json.dumps(recording.to_dict(include_runs=args.include_runs), indent=indent)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"Sections written to {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
