"""
JSON exporter for Sprout.

Exports recommendation bundles and assessments as clean, human-readable JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from src.models import GrowthAssessment


def export_json(
    model: BaseModel,
    output_path: Path | None = None,
    indent: int = 2,
    include_nulls: bool = False,
) -> str:
    """
    Export any result model to JSON format.
    
    Args:
        model: The bundle, assessment or row to export
        output_path: Optional path to write the JSON file
        indent: JSON indentation level
        include_nulls: Whether to include null values in output
    
    Returns:
        JSON string representation of the model
    """
    data = model.model_dump(mode="json", exclude_none=not include_nulls)
    json_str = json.dumps(data, indent=indent)
    
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_str)
    
    return json_str


def export_json_summary(assessment: GrowthAssessment) -> dict[str, Any]:
    """
    Export a compact summary of an assessment (useful for listings).
    
    Returns a dict with one entry per metric.
    """
    return {
        "child_name": assessment.child_name,
        "sex": assessment.sex.value,
        "age_months": assessment.age_months,
        "age_group": assessment.recommendations.age_group,
        "all_sufficient": assessment.all_sufficient,
        "metrics": {
            m.metric.value: {
                "gain": m.gain,
                "unit": m.gain_unit.value,
                "minimum": m.minimum_gain,
                "sufficient": m.sufficient,
                "status": m.status.value,
            }
            for m in assessment.metrics
        },
    }
