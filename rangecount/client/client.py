#!/usr/bin/env python3
"""
rangecount CLI
Counts word frequencies in a file with concurrent byte-range workers and
prints a ranked report
"""

import argparse
import logging
import sys
import time

from rangecount.client.report import (
    format_bytes,
    format_duration,
    format_range_summary,
    format_word_table,
    rank_words,
)
from rangecount.common import config
from rangecount.common.errors import ConfigurationError, RangeCountError
from rangecount.coordinator.job_manager import count_file_concurrently
from rangecount.coordinator.metrics import MetricsCollector

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rangecount',
        description='Concurrent word-frequency counter over byte ranges of a file'
    )
    parser.add_argument('--file', '-f', required=True, help='Path to the input text file')
    parser.add_argument('--segments', '-s', type=int, default=None,
                        help='Number of byte ranges / worker threads (default: CPU count)')
    parser.add_argument('--top', '-n', type=int, default=10,
                        help='Number of most frequent words to show (default: 10)')
    parser.add_argument('--all', action='store_true', help='Show every word instead of the top N')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show per-segment results')
    parser.add_argument('--segment-top', type=int, default=5,
                        help='Words shown per segment in verbose mode (default: 5)')
    parser.add_argument('--overlap', type=int, default=None,
                        help=f'Read-ahead window in bytes (default: {config.OVERLAP_BYTES})')
    parser.add_argument('--metrics-out', default=None, help='Write run metrics as JSON to this path')
    parser.add_argument('--log-level', default=config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: %(default)s)')
    return parser


def run(args) -> int:
    """Run a count for parsed arguments and print the report"""
    segments = args.segments if args.segments is not None else config.default_segment_count()
    collector = MetricsCollector()

    start = time.time()
    try:
        results, consolidated = count_file_concurrently(
            args.file,
            segments,
            overlap=args.overlap,
            metrics=collector
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except RangeCountError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    elapsed = time.time() - start

    if args.verbose:
        print(f"Segments ({len(results)}):")
        for result in results:
            print(f"  {format_range_summary(result, args.segment_top)}")
        print()

    ranked = rank_words(consolidated, None if args.all else args.top)
    title = "All words" if args.all else f"Top {min(args.top, len(consolidated))} words"
    print(f"{title}:")
    print(format_word_table(ranked))
    print()

    metrics = next(iter(collector.all_metrics()), None)
    size = metrics.file_size_bytes if metrics else 0
    print(f"File: {args.file} ({format_bytes(size)})")
    print(f"Segments: {len(results)}")
    print(f"Unique words: {len(consolidated)}")
    print(f"Total words: {sum(consolidated.values())}")
    print(f"Elapsed: {format_duration(elapsed)}")

    if args.metrics_out and metrics:
        try:
            metrics.save_to_file(args.metrics_out)
        except OSError as e:
            print(f"Error: write metrics: {e}", file=sys.stderr)
            return EXIT_ERROR
        print(f"✓ Metrics written to {args.metrics_out}")

    return EXIT_OK


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=config.LOG_FORMAT)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
