from __future__ import annotations

import json
from pathlib import Path

from complexity_probe.models import CandidateCurve, FitResult, Measurement
from complexity_probe.report import format_report, plot_fit, save_report_json

MEASUREMENTS = [
    Measurement(len=10, min=0.010, max=0.014, avg=0.012),
    Measurement(len=20, min=0.020, max=0.025, avg=0.022),
    Measurement(len=40, min=0.040, max=0.049, avg=0.043),
]
BEST = FitResult(coefficient=0.001, curve=CandidateCurve.LINEAR, normalized_rms=0.0123)


def test_format_report_lists_rows_and_complexity():
    text = format_report("bin/sort", "bench.yaml", MEASUREMENTS, BEST)
    lines = text.splitlines()
    assert lines[0] == "Binary file: bin/sort"
    assert lines[1] == "Config file: bench.yaml"
    assert lines[2].startswith("Len")
    assert lines[4].split() == ["10", "0.01000", "0.01200", "0.01400"]
    assert lines[-2] == "Complexity: 0.001 O(N)"
    assert lines[-1] == "RMS: 1.23%"


def test_save_report_json(tmp_path: Path):
    out = save_report_json(
        tmp_path / "reports" / "run.json", "bin/sort", MEASUREMENTS, BEST, [BEST]
    )
    data = json.loads(out.read_text(encoding="utf-8"))
    for key in ("target", "timestamp", "measurements", "best", "candidates"):
        assert key in data
    assert data["best"] == {"coefficient": 0.001, "curve": "O(N)", "normalized_rms": 0.0123}
    assert [m["len"] for m in data["measurements"]] == [10, 20, 40]
    assert not (tmp_path / "reports" / "run.json.tmp").exists()


def test_plot_fit_writes_png(tmp_path: Path):
    out = plot_fit(MEASUREMENTS, BEST, tmp_path / "charts" / "fit.png")
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
