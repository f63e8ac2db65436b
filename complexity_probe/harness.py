"""Execution harness: runs the target program over growing inputs.

For every generation the harness grows all argument generators once (except
generation 0, which keeps initial sizes), then runs ``iteration_count``
trials. Each trial renders fresh payloads into
``generation_{g}_iteration_{i}.txt``, starts the target with that path as its
only argument and times it until exit. Trials never run concurrently and any
failed trial aborts the whole run; measurements collected so far are
discarded.
"""

from __future__ import annotations

import logging
import os
import random
import subprocess
import tempfile
import time
from pathlib import Path
from typing import List, Sequence

from complexity_probe.errors import (
    ConfigError,
    FailedToStart,
    IoFailure,
    NotSuccessful,
    Timeout,
)
from complexity_probe.generators import VALUE_SEPARATOR, ArgumentSpec
from complexity_probe.models import GenerationStats, Measurement

logger = logging.getLogger("complexity_probe.harness")


class BenchmarkRunner:
    def __init__(
        self,
        target_path: str | os.PathLike,
        generators: Sequence[ArgumentSpec],
        generation_count: int,
        iteration_count: int,
        temp_dir: str | os.PathLike,
        rng: random.Random | None = None,
        timeout_s: float | None = None,
    ):
        """Prepare a run; nothing is executed until ``run`` is called.

        Args:
            target_path: Executable to benchmark.
            generators: Argument generators, rendered and grown in order.
            generation_count: Number of size steps (>= 1).
            iteration_count: Trials per generation (>= 1).
            temp_dir: Existing directory for the transient argument files.
            rng: Random source for rendering; a fresh unseeded one if omitted.
            timeout_s: Per-trial wall-clock limit; ``None`` waits forever.

        Raises:
            ConfigError: Counts below 1 or non-positive timeout.
        """
        if generation_count < 1:
            raise ConfigError(f"generation count must be >= 1, got {generation_count}")
        if iteration_count < 1:
            raise ConfigError(f"iteration count must be >= 1, got {iteration_count}")
        if timeout_s is not None and timeout_s <= 0:
            raise ConfigError(f"timeout must be > 0 seconds, got {timeout_s}")
        self.target_path = Path(target_path)
        self.generators = list(generators)
        self.generation_count = generation_count
        self.iteration_count = iteration_count
        self.temp_dir = Path(temp_dir)
        self.rng = rng if rng is not None else random.Random()
        self.timeout_s = timeout_s

    def run(self) -> List[Measurement]:
        measurements: List[Measurement] = []
        for gen in range(self.generation_count):
            if gen == 0:
                length = sum(g.current_length() for g in self.generators)
            else:
                length = sum(g.advance() for g in self.generators)
            stats = GenerationStats(len=length)

            for it in range(self.iteration_count):
                path = self._write_args(gen, it)
                duration = self._execute(path)
                logger.debug("gen=%d iter=%d len=%d time=%.6fs", gen, it, length, duration)
                stats.update(duration)

            measurement = stats.finish(self.iteration_count)
            logger.info(
                "Generation %d/%d len=%d min=%.6fs avg=%.6fs max=%.6fs",
                gen + 1,
                self.generation_count,
                measurement.len,
                measurement.min,
                measurement.avg,
                measurement.max,
            )
            measurements.append(measurement)
        return measurements

    def _write_args(self, gen: int, it: int) -> Path:
        path = self.temp_dir / f"generation_{gen}_iteration_{it}.txt"
        payload = VALUE_SEPARATOR.join(g.render(self.rng) for g in self.generators)
        try:
            path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise IoFailure(path, e) from e
        return path

    def _execute(self, args_path: Path) -> float:
        """Run the target once and return its wall-clock time in seconds."""
        start = time.perf_counter()
        try:
            completed = subprocess.run(
                [str(self.target_path), str(args_path)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout_s,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise Timeout(self.target_path, self.timeout_s) from e
        except OSError as e:
            raise FailedToStart(self.target_path, e) from e
        elapsed = time.perf_counter() - start

        if completed.returncode != 0:
            # negative return codes mean the child was killed by a signal
            code = completed.returncode if completed.returncode > 0 else None
            raise NotSuccessful(code)
        return elapsed


def run(
    target_path: str | os.PathLike,
    generators: Sequence[ArgumentSpec],
    generation_count: int,
    iteration_count: int,
    temp_dir: str | os.PathLike | None = None,
    rng: random.Random | None = None,
    timeout_s: float | None = None,
) -> List[Measurement]:
    """Measure ``target_path`` and return one ``Measurement`` per generation.

    When ``temp_dir`` is omitted a temporary directory is created for the
    argument files and removed afterwards.
    """
    if temp_dir is not None:
        return BenchmarkRunner(
            target_path, generators, generation_count, iteration_count, temp_dir, rng, timeout_s
        ).run()
    with tempfile.TemporaryDirectory(prefix="complexity_probe_") as tmp:
        return BenchmarkRunner(
            target_path, generators, generation_count, iteration_count, tmp, rng, timeout_s
        ).run()
