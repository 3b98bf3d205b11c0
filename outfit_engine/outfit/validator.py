"""
코디 구성 검증 및 생성/수정 헬퍼

규칙 (모두 독립적으로 검사, 위반 사항을 한 번에 반환):
1. 아이템 수는 2개 이상 6개 이하
2. dress 또는 (top + bottom) 필수
3. accessory를 제외한 위치는 한 번씩만 사용 가능
"""

import logging
import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone

from outfit_engine.outfit.exceptions import OutfitValidationError
from outfit_engine.outfit.schemas import (
    CreateOutfitInput,
    Outfit,
    OutfitItemRef,
    OutfitValidationResult,
    Position,
    UpdateOutfitInput,
)

logger = logging.getLogger(__name__)

MIN_OUTFIT_ITEMS = 2
MAX_OUTFIT_ITEMS = 6

ERROR_TOO_FEW = f"An outfit must have at least {MIN_OUTFIT_ITEMS} items"
ERROR_TOO_MANY = f"An outfit can have at most {MAX_OUTFIT_ITEMS} items"
ERROR_MISSING_BASE = "An outfit must have either a dress OR both a top and bottom"
ERROR_DUPLICATE_POSITION = "Each position (except accessory) can only be used once"


def validate_outfit_items(items: Sequence[OutfitItemRef]) -> OutfitValidationResult:
    errors: list[str] = []

    if len(items) < MIN_OUTFIT_ITEMS:
        errors.append(ERROR_TOO_FEW)
    if len(items) > MAX_OUTFIT_ITEMS:
        errors.append(ERROR_TOO_MANY)

    positions = [item.position for item in items]
    has_dress = Position.DRESS in positions
    has_top_and_bottom = Position.TOP in positions and Position.BOTTOM in positions
    if not has_dress and not has_top_and_bottom:
        errors.append(ERROR_MISSING_BASE)

    counts = Counter(p for p in positions if p != Position.ACCESSORY)
    if any(count > 1 for count in counts.values()):
        errors.append(ERROR_DUPLICATE_POSITION)

    return OutfitValidationResult(valid=not errors, errors=errors)


def create_outfit(
    data: CreateOutfitInput,
    outfit_id: str | None = None,
    now: datetime | None = None,
) -> Outfit:
    """검증을 통과한 경우에만 Outfit 레코드 생성"""
    validation = validate_outfit_items(data.items)
    if not validation.valid:
        logger.info("Rejected outfit creation: %s", validation.errors)
        raise OutfitValidationError(validation.errors)

    return Outfit(
        id=outfit_id or str(uuid.uuid4()),
        name=data.name,
        occasion=data.occasion,
        is_ai_generated=data.is_ai_generated,
        weather_context=data.weather_context,
        items=list(data.items),
        created_at=now or datetime.now(timezone.utc),
    )


def update_outfit(outfit: Outfit, update: UpdateOutfitInput) -> Outfit:
    """수정된 새 Outfit 반환

    items가 주어지면 기존 목록과 합치지 않고, 교체될 전체 목록을 다시 검증합니다.
    """
    changes: dict[str, object] = {}

    if update.items is not None:
        validation = validate_outfit_items(update.items)
        if not validation.valid:
            logger.info("Rejected outfit update for %s: %s", outfit.id, validation.errors)
            raise OutfitValidationError(validation.errors)
        changes["items"] = list(update.items)

    if update.name is not None:
        changes["name"] = update.name
    if update.occasion is not None:
        changes["occasion"] = update.occasion
    if update.is_favorite is not None:
        changes["is_favorite"] = update.is_favorite

    return outfit.model_copy(update=changes)
