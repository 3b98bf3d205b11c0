import logging

from fastapi import APIRouter, HTTPException, status

from outfit_engine.outfit.exceptions import OutfitValidationError
from outfit_engine.outfit.schemas import (
    CreateOutfitInput,
    Outfit,
    OutfitUpdateRequest,
    OutfitValidationRequest,
    OutfitValidationResult,
)
from outfit_engine.outfit.validator import (
    create_outfit,
    update_outfit,
    validate_outfit_items,
)

router = APIRouter(prefix="/v1/outfits", tags=["outfit"])
logger = logging.getLogger(__name__)


@router.post(
    "/validate",
    response_model=OutfitValidationResult,
    status_code=status.HTTP_200_OK,
)
async def validate_outfit(request: OutfitValidationRequest) -> OutfitValidationResult:
    """코디 구성 검증 (위반 규칙을 모두 반환, 실패해도 200)"""
    result = validate_outfit_items(request.items)
    logger.info("Validated %d outfit items: valid=%s", len(request.items), result.valid)
    return result


@router.post("", response_model=Outfit, status_code=status.HTTP_201_CREATED)
async def build_outfit(request: CreateOutfitInput) -> Outfit:
    try:
        return create_outfit(request)
    except OutfitValidationError as err:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=err.errors,
        ) from err


@router.post("/update", response_model=Outfit, status_code=status.HTTP_200_OK)
async def edit_outfit(request: OutfitUpdateRequest) -> Outfit:
    try:
        return update_outfit(request.outfit, request.changes)
    except OutfitValidationError as err:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=err.errors,
        ) from err
