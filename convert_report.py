"""Convert Personal Safety Message reports into tracked objects.

Reads a JSON file holding one report object or a list of them, converts each
report and writes one versioned envelope per converted report. Reports that
cannot be timestamped or projected are dropped and logged.

Usage:
    python convert_report.py --input reports.json
    python convert_report.py --input reports.json --config configs/default.yaml --output objects.json
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from configs.settings import DEFAULT_CONFIG_PATH, build_context, load_config
from contracts.codec import report_from_dict, tracked_object_to_dict
from contracts.versioning import make_envelope
from conversion.psm import ConversionContext, psm_to_tracked_object
from exceptions import ConfigError, ConversionError
from log_config.logger import add_file_sinks, get_logger, set_console_level
from telemetry.monitor import ConversionMonitor

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert PSM reports into tracked objects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON file with one report or a list of reports",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="YAML configuration file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output JSON file (defaults to stdout)",
    )
    return parser.parse_args(argv)


def convert_reports(
    raw_reports: List[Dict[str, Any]],
    context: ConversionContext,
    monitor: ConversionMonitor,
) -> List[Dict[str, Any]]:
    """Convert each raw report, dropping the ones that fail."""
    envelopes = []
    for index, raw in enumerate(raw_reports):
        start = time.perf_counter()
        try:
            report = report_from_dict(raw)
            obj = psm_to_tracked_object(report, context)
        except ConversionError as e:
            monitor.record_dropped(e)
            logger.warning(f"Dropping report {index}: {type(e).__name__}: {e}")
            continue
        monitor.record_converted(obj.stamp, (time.perf_counter() - start) * 1000.0)
        envelopes.append(make_envelope(tracked_object_to_dict(obj)))
    return envelopes


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        context = build_context(config)
    except ConfigError as e:
        logger.error(f"Cannot load configuration: {e}")
        return 2

    set_console_level(config.logging.level)
    if config.logging.log_dir:
        add_file_sinks(Path(config.logging.log_dir))

    try:
        data = json.loads(args.input.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read reports from {args.input}: {e}")
        return 2
    raw_reports = data if isinstance(data, list) else [data]

    monitor = ConversionMonitor()
    envelopes = convert_reports(raw_reports, context, monitor)

    text = json.dumps(envelopes, indent=2)
    if args.output is None:
        sys.stdout.write(text + "\n")
    else:
        args.output.write_text(text)

    snapshot = monitor.snapshot()
    logger.info(f"Conversion summary: {snapshot.to_dict()}")
    return 0 if snapshot.converted or not raw_reports else 1


if __name__ == "__main__":
    sys.exit(main())
