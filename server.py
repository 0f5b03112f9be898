"""
Sprout Web Server

FastAPI-based web server exposing the Sprout growth calculations.
"""

import logging
import sys
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Setup paths
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from knowledge.growth import expected_monthly_growth, lookup, standards_table
from knowledge.sleep import get_sleep_recommendation
from src.config import GrowthSettings, load_settings
from src.engines import (
    assess_growth,
    build_recommendations,
    calculate_progress,
    growth_status,
    progress_band,
    progress_relative_to_standard,
)
from src.models import (
    ExpectedGrowth,
    GrowthAssessment,
    GrowthRecord,
    GrowthStandardRow,
    MeasurementUnit,
    Metric,
    ProgressResult,
    RecommendationBundle,
    Sex,
    SleepRecommendation,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> GrowthSettings:
    """Settings dependency, loaded once; override in tests with app.dependency_overrides."""
    return load_settings()


logging.basicConfig(level=get_settings().log_level)

# Create FastAPI app
app = FastAPI(
    title="Sprout",
    description="Sprout - Infant Growth Standards API",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Response models
class TargetProgressResponse(BaseModel):
    """Progress toward a gain target, with its qualitative reading."""
    result: ProgressResult
    status: str
    band: str


class StandardProgressResponse(BaseModel):
    """A value as a share of the WHO median."""
    percentage: int = Field(..., ge=0, le=100)
    metric: Metric
    age_months: float
    sex: Sex
    who_value: float
    status: str


class AssessmentRequest(BaseModel):
    """Request model for assessing a growth record."""
    record: GrowthRecord
    as_of: Optional[date] = Field(None, description="Date the age is computed for")


# Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.get("/api/standards/{sex}", response_model=list[GrowthStandardRow])
async def get_standards_table(sex: Sex):
    """Full WHO standards table for a sex."""
    return standards_table(sex)


@app.get("/api/standards/{sex}/{age_months}", response_model=GrowthStandardRow)
async def get_standard(sex: Sex, age_months: float):
    """WHO standard at an age, interpolated between tabulated months."""
    return lookup(age_months, sex)


@app.get("/api/expected-growth", response_model=ExpectedGrowth)
async def get_expected_growth(
    age_months: float = Query(..., description="Age in months"),
    sex: Sex = Query(..., description="Child's sex"),
):
    """Expected gain (g / mm) over the month ending at an age."""
    return expected_monthly_growth(age_months, sex)


@app.get("/api/progress/target", response_model=TargetProgressResponse)
async def get_target_progress(
    birth: float = Query(..., description="Value at birth"),
    current: float = Query(..., description="Current cumulative value"),
    target_gain: float = Query(..., description="Gain expected on top of birth"),
    ceiling: Optional[float] = Query(None, description="Optional cap on the total target"),
):
    """Progress toward a gain target since birth."""
    result = calculate_progress(birth, current, target_gain, ceiling)
    return TargetProgressResponse(
        result=result,
        status=growth_status(result.percentage).value,
        band=progress_band(result.percentage).value,
    )


@app.get("/api/progress/standard", response_model=StandardProgressResponse)
async def get_standard_progress(
    value: float = Query(..., description="Measured value"),
    age_months: float = Query(..., description="Age in months"),
    sex: Sex = Query(..., description="Child's sex"),
    metric: Metric = Query(..., description="weight, height or head_circ"),
    unit: Optional[MeasurementUnit] = Query(None, description="Unit of value (defaults to kg/cm)"),
):
    """A measured value as a percentage of the WHO median at an age."""
    if unit is not None and unit.is_mass != (metric == Metric.WEIGHT):
        raise HTTPException(status_code=400, detail=f"Unit {unit.value} does not fit {metric.value}")

    percentage = progress_relative_to_standard(value, age_months, sex, metric, unit)
    return StandardProgressResponse(
        percentage=percentage,
        metric=metric,
        age_months=age_months,
        sex=sex,
        who_value=lookup(age_months, sex).value(metric),
        status=growth_status(percentage).value,
    )


@app.get("/api/recommendations", response_model=RecommendationBundle)
async def get_recommendations(
    age_months: float = Query(..., description="Age in months"),
    sex: Sex = Query(..., description="Child's sex"),
    settings: GrowthSettings = Depends(get_settings),
):
    """WHO-based growth recommendations for an age and sex."""
    return build_recommendations(age_months, sex, settings)


@app.post("/api/assessments", response_model=GrowthAssessment)
async def create_assessment(
    request: AssessmentRequest,
    settings: GrowthSettings = Depends(get_settings),
):
    """Assess a growth record against the recommendations."""
    assessment = assess_growth(request.record, request.as_of, settings)
    logger.info(
        "Assessed %s at %s months: all sufficient=%s",
        request.record.child_name or "record",
        assessment.age_months,
        assessment.all_sufficient,
    )
    return assessment


@app.get("/api/sleep", response_model=SleepRecommendation)
async def get_sleep(age_months: float = Query(..., ge=0, description="Age in months")):
    """Recommended daily sleep for an age."""
    return get_sleep_recommendation(age_months)


def run_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
