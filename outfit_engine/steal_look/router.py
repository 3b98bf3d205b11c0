import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from outfit_engine.steal_look.schemas import StealLookRequest, StealLookResult
from outfit_engine.steal_look.service import StealLookService, get_steal_look_service

router = APIRouter(prefix="/v1/steal-look", tags=["steal-look"])
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=StealLookResult, status_code=status.HTTP_200_OK)
async def analyze_look(
    request: StealLookRequest,
    service: Annotated[StealLookService, Depends(get_steal_look_service)],
) -> StealLookResult:
    """
    친구 게시물의 태그 아이템을 내 옷장과 매칭하여 재현 가능 여부를 계산합니다.
    """
    result = await service.analyze(request)
    logger.info(
        "Steal-the-look for post %s: score=%d, can_recreate=%s",
        request.post_id,
        result.overall_score,
        result.can_recreate,
    )
    return result
