"""Artifact generation.

Writes simulation outputs to disk: raw final prices as CSV, the structured
summary as JSON and the text report as Markdown.
"""

import json
import math
from pathlib import Path

import structlog
from regime_pathways.engine.simulator import SimulationResult
from regime_pathways.report.console import render_report

logger = structlog.get_logger()


def sanitize_floats(obj):
    """Recursively replace NaN/Infinity with None in nested structures."""
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            return None
        return obj
    if isinstance(obj, dict):
        return {k: sanitize_floats(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [sanitize_floats(v) for v in obj]
    return obj


def build_payload(
    result: SimulationResult,
    growth_rows: list[dict[str, float]] | None = None,
) -> dict:
    """Build a JSON-serializable view of a simulation result.

    Raw per-path final prices are left out; they go to results.csv.
    Prices that overflowed the float range are reported as null.
    """
    return sanitize_floats({
        "activity_levels": {
            name: run.model_dump(mode="json") for name, run in result.runs.items()
        },
        "growth_comparison": growth_rows or [],
    })


def write_artifacts(
    result: SimulationResult,
    outdir: str | Path,
    growth_rows: list[dict[str, float]] | None = None,
) -> dict[str, Path]:
    """Write results.csv, summary.json and report.md into outdir.

    Args:
        result: Output of run_activity_levels
        outdir: Output directory (created if missing)
        growth_rows: Fixed-growth comparison rows to include

    Returns:
        Mapping from artifact kind to written path
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    paths = {
        "results": outdir / "results.csv",
        "summary": outdir / "summary.json",
        "report": outdir / "report.md",
    }

    result.final_prices.to_csv(paths["results"], index=False)

    with open(paths["summary"], "w") as f:
        json.dump(build_payload(result, growth_rows), f, indent=2, allow_nan=False)

    with open(paths["report"], "w") as f:
        f.write("# Market Regime Price Simulation\n\n```\n")
        f.write(render_report(result, growth_rows))
        f.write("```\n")

    logger.info("artifacts_written", outdir=str(outdir), files=[p.name for p in paths.values()])
    return paths
