"""JSON export of a validation result.

Why JSON:
- CI pipelines can parse the outcome instead of scraping console output.
- `success` is included next to the diagnostics so consumers need no logic.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ValidationResult


def result_to_json(result: ValidationResult) -> str:
    payload = result.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_result_json(*, result: ValidationResult, output_path: Path) -> Path:
    """Write `result` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result_to_json(result) + "\n", encoding="utf-8")
    return output_path
