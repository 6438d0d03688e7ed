"""Run-metadata sidecar — records the query behind a report.json."""

from __future__ import annotations

import datetime
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

from friendgraph.model import QueryKind, RecommendationReport, RunMetadata, SeparationReport


def build_run_metadata(
    report: RecommendationReport | SeparationReport,
    data_path: Path,
    out_path: Path,
    workers: int | None = None,
) -> RunMetadata:
    """Describe the query that produced *report*."""
    timestamp = datetime.datetime.now(datetime.UTC).isoformat().replace("+00:00", "Z")
    common = {
        "timestamp_utc": timestamp,
        "data_path": str(data_path.resolve()),
        "output_dir": str(out_path.resolve()),
    }
    if isinstance(report, RecommendationReport):
        return RunMetadata(
            query=QueryKind.RECOMMEND,
            student_id=report.student_id,
            result_count=len(report.candidates),
            **common,
        )
    return RunMetadata(
        query=QueryKind.REMOTE_PAIRS,
        threshold=report.threshold,
        workers=workers,
        result_count=len(report.pairs),
        **common,
    )


def write_run_metadata(
    report: RecommendationReport | SeparationReport,
    data_path: Path,
    out_path: Path,
    workers: int | None = None,
) -> Path:
    """Write run-metadata.json for *report* to *out_path* and return the path."""
    from pathlib import Path as _Path

    meta = build_run_metadata(report, data_path, out_path, workers)
    _Path(str(out_path)).mkdir(parents=True, exist_ok=True)
    out_file = _Path(str(out_path), "run-metadata.json")
    out_file.write_text(
        json.dumps(meta.model_dump(mode="json", exclude_none=True), sort_keys=True, indent=2)
        + "\n",
        encoding="utf-8",
    )
    return out_file
