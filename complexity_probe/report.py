"""Human-readable report, JSON persistence and timing chart."""

from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from complexity_probe.models import FitResult, Measurement  # noqa: E402

HEADER = "Len            Min time(sec)   Avg time(sec)   Max time(sec)"


def format_report(
    target_path: str | os.PathLike,
    config_path: str | os.PathLike | None,
    measurements: Sequence[Measurement],
    fit: FitResult,
) -> str:
    """Render the measurement table followed by the selected complexity."""
    lines = [
        f"Binary file: {target_path}",
        f"Config file: {config_path if config_path is not None else '-'}",
        HEADER,
        "-" * len(HEADER),
    ]
    for m in measurements:
        lines.append(f"{m.len:<12}{m.min:>16.5f}{m.avg:>16.5f}{m.max:>16.5f}")
    lines.append(f"Complexity: {fit.coefficient:g} {fit.curve}")
    lines.append(f"RMS: {fit.normalized_rms * 100.0:.2f}%")
    return "\n".join(lines)


def report_payload(
    target_path: str | os.PathLike,
    measurements: Sequence[Measurement],
    fit: FitResult,
    candidates: Sequence[FitResult] = (),
) -> dict:
    return {
        "target": str(target_path),
        "timestamp": datetime.now().strftime("%Y%m%d_%H%M%S"),
        "measurements": [m.to_dict() for m in measurements],
        "best": fit.to_dict(),
        "candidates": [c.to_dict() for c in candidates],
    }


def save_report_json(
    path: str | os.PathLike,
    target_path: str | os.PathLike,
    measurements: Sequence[Measurement],
    fit: FitResult,
    candidates: Sequence[FitResult] = (),
) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = report_payload(target_path, measurements, fit, candidates)
    # atomic replace
    tmp_path = out.with_name(out.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, out)
    return out


def plot_fit(
    measurements: Sequence[Measurement],
    fit: FitResult,
    save_path: str | os.PathLike,
    title: str | None = None,
) -> Path:
    """Plot observed min/avg/max times against the fitted curve."""
    out = Path(save_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    lens = [m.len for m in measurements]
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    ax.fill_between(
        lens,
        [m.min for m in measurements],
        [m.max for m in measurements],
        alpha=0.2,
        label="min..max",
    )
    ax.plot(lens, [m.avg for m in measurements], marker="o", linewidth=1.5, label="avg")
    ax.plot(
        lens,
        [m.min for m in measurements],
        marker="o",
        markersize=4,
        markerfacecolor="white",
        linewidth=2,
        label="min",
    )
    ax.plot(
        lens,
        [fit.coefficient * fit.curve(n) for n in lens],
        linestyle="--",
        linewidth=2,
        label=f"{fit.coefficient:.3g} * {fit.curve}",
    )
    ax.set_xlabel("Argument length", fontsize=12)
    ax.set_ylabel("Time (s)", fontsize=12)
    ax.set_title(
        title or f"Best fit {fit.curve} (RMS {fit.normalized_rms * 100.0:.2f}%)",
        fontsize=14,
        fontweight="bold",
    )
    ax.grid(True, alpha=0.25, linestyle="--", linewidth=0.7)
    ax.legend(loc="upper left", frameon=False)

    fig.savefig(out, dpi=180)
    plt.close(fig)
    return out
