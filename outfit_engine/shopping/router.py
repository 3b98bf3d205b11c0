import logging

from fastapi import APIRouter, status

from outfit_engine.shopping.reasoner import group_matches_by_category
from outfit_engine.shopping.scans import compute_scan_statistics
from outfit_engine.shopping.schemas import (
    CompatibilityRequest,
    CompatibilityResponse,
    MatchReasonsRequest,
    MatchReasonsResponse,
    ScanStatistics,
    ScanStatisticsRequest,
)
from outfit_engine.shopping.scorer import get_compatibility_rating, score_compatibility

router = APIRouter(prefix="/v1/shopping", tags=["shopping"])
logger = logging.getLogger(__name__)


@router.post(
    "/compatibility",
    response_model=CompatibilityResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_compatibility(request: CompatibilityRequest) -> CompatibilityResponse:
    """
    스캔한 상품과 옷장 스냅샷을 받아 호환성 점수, 매칭 아이템, 인사이트를 계산합니다.
    """
    logger.info(
        "Received compatibility request for product: %s (wardrobe size: %d)",
        request.analysis.product_name,
        len(request.wardrobe),
    )

    result = score_compatibility(request.analysis, request.wardrobe)
    return CompatibilityResponse(
        **result.model_dump(),
        rating=get_compatibility_rating(result.score),
    )


@router.post(
    "/match-reasons",
    response_model=MatchReasonsResponse,
    status_code=status.HTTP_200_OK,
)
async def explain_matches(request: MatchReasonsRequest) -> MatchReasonsResponse:
    groups = group_matches_by_category(request.analysis, request.items)
    return MatchReasonsResponse(groups=groups)


@router.post(
    "/scans/statistics",
    response_model=ScanStatistics,
    status_code=status.HTTP_200_OK,
)
async def scan_statistics(request: ScanStatisticsRequest) -> ScanStatistics:
    return compute_scan_statistics(request.scans)
