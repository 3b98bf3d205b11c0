import logging
from collections.abc import Sequence

from outfit_engine.shopping import rules
from outfit_engine.shopping.schemas import (
    MatchReasonGroup,
    MatchReasonItem,
    ProductAnalysis,
)
from outfit_engine.wardrobe.schemas import Category, WardrobeItem

logger = logging.getLogger(__name__)

REASON_CLASSIC = "Classic pairing"
REASON_COLOR = "Color harmony"
REASON_STYLE = "Style match"
REASON_COMPLETE = "Complete the look"


def explain_match(analysis: ProductAnalysis, item: WardrobeItem) -> str:
    """옷장 아이템이 상품과 매칭된 이유 (같은 입력이면 항상 같은 문장)"""
    if rules.neutral_pairing(analysis, item):
        return REASON_CLASSIC
    if rules.shares_color(analysis, item):
        return REASON_COLOR
    if rules.style_aligned(analysis, item):
        return REASON_STYLE
    return REASON_COMPLETE


def group_matches_by_category(
    analysis: ProductAnalysis,
    items: Sequence[WardrobeItem],
) -> list[MatchReasonGroup]:
    """'전체 보기' 화면용: 카테고리별로 묶은 (아이템, 이유) 목록

    그룹 순서는 Category 정의 순서, 그룹 내 순서는 입력 순서를 따릅니다.
    """
    grouped: dict[Category, list[MatchReasonItem]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(
            MatchReasonItem(item=item, reason=explain_match(analysis, item))
        )

    groups = [
        MatchReasonGroup(category=category, items=grouped[category])
        for category in Category
        if category in grouped
    ]
    logger.debug("Grouped %d matches into %d categories", len(items), len(groups))
    return groups
