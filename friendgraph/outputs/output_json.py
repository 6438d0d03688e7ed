"""JSON output — deterministic report.json generation."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

from friendgraph.model import RecommendationReport, SeparationReport


def render_json(report: RecommendationReport | SeparationReport, out_path: Path) -> Path:
    """Write byte-deterministic report.json and return the written path."""
    from pathlib import Path as _Path

    data = _sort_for_determinism(report).model_dump(mode="json")
    _Path(str(out_path)).mkdir(parents=True, exist_ok=True)
    out_file = _Path(str(out_path), "report.json")
    out_file.write_text(
        json.dumps(data, sort_keys=True, indent=2) + "\n",
        encoding="utf-8",
    )
    return out_file


def _sort_for_determinism(
    report: RecommendationReport | SeparationReport,
) -> RecommendationReport | SeparationReport:
    if isinstance(report, RecommendationReport):
        return report.model_copy(
            update={"candidates": sorted(report.candidates, key=lambda s: s.id)}
        )
    return report.model_copy(
        update={"pairs": sorted(report.pairs, key=lambda p: (p.id1, p.id2))}
    )
