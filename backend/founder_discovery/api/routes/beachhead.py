"""Beachhead: stateless segment scoring.

Invariants:
    - No persistence; ratings in, readiness out
    - Ratings outside 1-5 are rejected with 400
"""

from fastapi import APIRouter

from founder_discovery.core.scoring import beachhead_readiness, recommend_beachhead
from founder_discovery.schemas.evaluation import (
    BeachheadReadinessResponse,
    BeachheadRecommendationRequest,
    BeachheadRecommendationResponse,
    SegmentRatingRequest,
)

router = APIRouter(prefix="/api/v1/beachhead", tags=["beachhead"])


@router.post("/readiness", response_model=BeachheadReadinessResponse)
async def score_segment(body: SegmentRatingRequest):
    readiness = beachhead_readiness(body.pain, body.access, body.willingness)
    return BeachheadReadinessResponse.model_validate(readiness)


@router.post("/recommend", response_model=BeachheadRecommendationResponse)
async def recommend_segment(body: BeachheadRecommendationRequest):
    """Pick the highest-scoring candidate; the first listed wins ties."""
    best = recommend_beachhead(body.segments)
    readiness = beachhead_readiness(best.pain, best.access, best.willingness)
    return BeachheadRecommendationResponse(
        name=best.name,
        readiness=BeachheadReadinessResponse.model_validate(readiness),
    )
