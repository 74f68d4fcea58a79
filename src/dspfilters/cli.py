"""
dspfilters CLI

Command-line interface for replaying recorded IMU logs through a filter chain:
- dspfilters-replay: filter every channel of a ``t,wx,wy,wz,ax,ay,az`` log

Configuration:
- YAML configuration: --config imu --config-dir configs/
- Command-line logging options override the configuration file
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from dspfilters.core.config import load_config
from dspfilters.core.logging import get_logger, setup_logging
from dspfilters.filters.chain import create_filter_chain
from dspfilters.replay import ImuReplay, replay_lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dspfilters-replay",
        description="Replay an IMU log through a configured filter chain",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "input",
        type=str,
        help="Path to the IMU log (t,wx,wy,wz,ax,ay,az per line)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default="imu",
        help="Config name (YAML file stem inside --config-dir)",
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="Directory holding the YAML configs (default: <repo>/configs)",
    )

    parser.add_argument(
        "--output",
        type=str,
        default="output.txt",
        help="Output file for filtered records",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured log level",
    )

    parser.add_argument(
        "--log-format",
        type=str,
        choices=("json", "console"),
        default=None,
        help="Override the configured log format",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the dspfilters-replay command."""
    args = build_parser().parse_args(argv)

    overrides: dict[str, dict[str, str]] = {}
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level
    if args.log_format:
        overrides.setdefault("logging", {})["format"] = args.log_format

    config = load_config(args.config, config_dir=args.config_dir, overrides=overrides)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    logger = get_logger(__name__)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error("Input file not found", path=str(input_path))
        return 1

    lines = input_path.read_text(encoding="utf-8").splitlines()
    if not lines:
        logger.error("No data read from input file", path=str(input_path))
        return 1

    chain = create_filter_chain(config.chain)
    replay = ImuReplay(chain, buffer_size=config.replay.buffer_size)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    n_written = 0
    with open(output_path, "w", encoding="utf-8") as f:
        for out_line in replay_lines(
            lines,
            replay,
            header=config.replay.header,
            timestamp_scale=config.replay.timestamp_scale,
        ):
            f.write(out_line + "\n")
            n_written += 1

    logger.info(
        "Replay complete",
        input=str(input_path),
        output=str(output_path),
        records=n_written,
        skipped=len([line for line in lines if line.strip()]) - n_written,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
