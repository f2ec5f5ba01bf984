"""Writing indexing results to the processed-output directory."""

import json
from pathlib import Path

from src.models.index_result import IndexResult


def result_path(output_dir: str | Path, source_id: str) -> Path:
    """Return where the result for ``source_id`` is written."""
    return Path(output_dir) / f"{source_id}.json"


def write_index_result(result: IndexResult, output_dir: str | Path) -> Path:
    """Write one source's sections and chunks as JSON.

    Args:
        result: The indexing result to write.
        output_dir: Directory for result files; created if missing.

    Returns:
        Path of the written file.
    """
    path = result_path(output_dir, result.source_id)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "source_id": result.source_id,
        "status": result.status,
        "stats": result.stats.model_dump(),
        "error": result.error.model_dump(mode="json") if result.error else None,
        **result.to_records(),
    }
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def read_index_result(path: str | Path) -> IndexResult:
    """Load a result written by write_index_result."""
    return IndexResult.model_validate_json(Path(path).read_text(encoding="utf-8"))
