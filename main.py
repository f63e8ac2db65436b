#!/usr/bin/env python3
"""Estimate the time complexity of a program from a run configuration.

Usage::

    python main.py --config bench.yaml [--path ./a.out] [--json out.json] [--plot out.png]
"""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from complexity_probe.config import ProgramConfig, load_config
from complexity_probe.errors import ComplexityProbeError, IoFailure
from complexity_probe.estimator import estimate, fit_all
from complexity_probe.harness import run
from complexity_probe.models import FitResult, Measurement
from complexity_probe.report import format_report, plot_fit, save_report_json

logger = logging.getLogger("complexity_probe")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Empirical time complexity estimation")
    parser.add_argument(
        "-c",
        "--config",
        required=True,
        help="Path to the YAML/JSON run configuration",
    )
    parser.add_argument(
        "-p",
        "--path",
        default=None,
        help="Path to the binary file (overrides 'path' from the config)",
    )
    parser.add_argument("--json", default=None, help="Write the report as JSON to this file")
    parser.add_argument("--plot", default=None, help="Save a timing chart (PNG) to this file")
    return parser


def measure(cfg: ProgramConfig) -> tuple[List[Measurement], FitResult, List[FitResult]]:
    rng = random.Random(cfg.seed) if cfg.seed is not None else random.Random()
    logger.info(
        "Target: %s args=%d gens=%d iters=%d timeout=%s",
        cfg.target_path,
        len(cfg.generators),
        cfg.gens,
        cfg.iters,
        cfg.timeout_s,
    )
    measurements = run(
        cfg.target_path,
        cfg.generators,
        cfg.gens,
        cfg.iters,
        temp_dir=cfg.temp_dir,
        rng=rng,
        timeout_s=cfg.timeout_s,
    )
    return measurements, estimate(measurements), fit_all(measurements)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = load_config(args.config)
        logging.getLogger().setLevel(getattr(logging, cfg.log_level.upper(), logging.INFO))
        if args.path:
            cfg.target_path = Path(args.path)
        if cfg.temp_dir is not None:
            try:
                cfg.temp_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise IoFailure(cfg.temp_dir, e) from e
        measurements, best, candidates = measure(cfg)
    except ComplexityProbeError as e:
        logger.error("Failed at stage '%s': %s", e.stage, e)
        return 1

    print(format_report(cfg.target_path, args.config, measurements, best))
    try:
        if args.json:
            out = save_report_json(args.json, cfg.target_path, measurements, best, candidates)
            logger.info("Saved JSON report to %s", out)
        if args.plot:
            out = plot_fit(measurements, best, args.plot)
            logger.info("Saved timing chart to %s", out)
    except OSError as e:
        logger.error("Failed to write report output: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
