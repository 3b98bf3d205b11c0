"""
Steal-the-Look 매칭

다른 사용자 게시물에 태그된 아이템 각각에 대해 내 옷장에서 가장 비슷한 아이템을 찾고,
exact / similar / missing 중 하나로 분류한 뒤 전체 재현 가능 점수를 계산합니다.

- exact: 같은 카테고리 + 대표 색상 일치 (또는 같은 색상 계열 + 같은 세부 카테고리)
- similar: 같은 카테고리, 색상/세부 카테고리 일부만 일치
  (세부 카테고리가 서로 다르면 감점, 색상 계열까지 다르면 최소 기준 미달)
- missing: SIMILAR_MIN_CONFIDENCE 이상인 후보 없음

AI 제안은 같은 카테고리 아이템을 가리키고 신뢰도 구간을 만족할 때만 사용하며,
exact는 NEAR_EXACT_CONFIDENCE 미만이면 similar로 낮추고
similar는 SIMILAR_MAX_CONFIDENCE로 상한을 둡니다.

후보가 여러 개면 신뢰도가 가장 높은 아이템을 고르고,
동점이면 최근 등록 아이템, 그 다음 ID 오름차순으로 결정합니다.
"""

import logging
from collections.abc import Mapping, Sequence

from outfit_engine.common.utils import clamp, normalize_label, round_half_up
from outfit_engine.steal_look.schemas import (
    AISuggestion,
    ForeignItem,
    ItemSummary,
    MatchResult,
    MatchType,
    StealLookResult,
)
from outfit_engine.wardrobe.schemas import (
    WardrobeItem,
    color_family,
    complete_items,
    recency_key,
)

logger = logging.getLogger(__name__)

# ============================================================
# 설정 상수
# ============================================================

EXACT_CONFIDENCE = 95
EXACT_SUBCATEGORY_BONUS = 5
NEAR_EXACT_CONFIDENCE = 85  # 같은 색상 계열 + 같은 세부 카테고리

SIMILAR_BASE_CONFIDENCE = 60
SIMILAR_FAMILY_BONUS = 15
SIMILAR_SUBCATEGORY_BONUS = 5
SUBCATEGORY_MISMATCH_PENALTY = 25  # 둘 다 세부 카테고리가 있는데 서로 다름
SIMILAR_MIN_CONFIDENCE = 40
SIMILAR_MAX_CONFIDENCE = 80

RECREATE_THRESHOLD = 80  # overall_score가 이 값 이상이면 재현 가능


def _summarize_foreign(target: ForeignItem) -> ItemSummary:
    return ItemSummary(
        id=target.id,
        name=target.name,
        category=target.category or "unknown",
        color=target.colors[0] if target.colors else "unknown",
        image_url=target.image_url,
    )


def _summarize_owned(item: WardrobeItem) -> ItemSummary:
    return ItemSummary(
        id=item.id,
        name=item.name,
        category=item.category.value,
        color=item.color or "unknown",
        image_url=item.display_image_url,
    )


def _classify_candidate(target: ForeignItem, item: WardrobeItem) -> tuple[MatchType, int] | None:
    """같은 카테고리 아이템 하나에 대한 (분류, 신뢰도). 카테고리가 다르면 None"""
    target_category = normalize_label(target.category)
    if not target_category or item.category.value != target_category:
        return None

    target_color = normalize_label(target.colors[0]) if target.colors else ""
    target_sub = normalize_label(target.sub_category)
    item_sub = normalize_label(item.sub_category)
    same_sub = bool(target_sub) and item_sub == target_sub
    sub_conflict = bool(target_sub) and bool(item_sub) and not same_sub
    same_family = bool(target_color) and color_family(target_color) in {
        color_family(c) for c in item.colors
    }

    if target_color and target_color in item.colors:
        bonus = EXACT_SUBCATEGORY_BONUS if same_sub else 0
        return MatchType.EXACT, min(100, EXACT_CONFIDENCE + bonus)

    if same_family and same_sub:
        return MatchType.EXACT, NEAR_EXACT_CONFIDENCE

    confidence = SIMILAR_BASE_CONFIDENCE
    if same_family:
        confidence += SIMILAR_FAMILY_BONUS
    if same_sub:
        confidence += SIMILAR_SUBCATEGORY_BONUS
    if sub_conflict:
        confidence -= SUBCATEGORY_MISMATCH_PENALTY
    return MatchType.SIMILAR, confidence


def _missing(target: ForeignItem, reason: str | None = None) -> MatchResult:
    category = normalize_label(target.category) or "similar item"
    return MatchResult(
        original_item=_summarize_foreign(target),
        match_type=MatchType.MISSING,
        matched_item=None,
        match_reason=reason or f"You don't have a {category} in your wardrobe",
        confidence=0,
    )


def match_item(target: ForeignItem, wardrobe: Sequence[WardrobeItem]) -> MatchResult:
    """속성 기반 매칭 (AI 없이 동작하는 기본 경로)"""
    candidates: list[tuple[int, WardrobeItem, MatchType]] = []
    for item in wardrobe:
        classified = _classify_candidate(target, item)
        if classified is None:
            continue
        match_type, confidence = classified
        if confidence >= SIMILAR_MIN_CONFIDENCE:
            candidates.append((confidence, item, match_type))

    if not candidates:
        return _missing(target)

    confidence, best, match_type = min(
        candidates, key=lambda c: (-c[0], *recency_key(c[1]))
    )

    if match_type == MatchType.EXACT:
        reason = f"You have the same {normalize_label(target.category)}!"
    else:
        reason = f"Try your {best.primary_color} {best.category.value} instead"

    return MatchResult(
        original_item=_summarize_foreign(target),
        match_type=match_type,
        matched_item=_summarize_owned(best),
        match_reason=reason,
        confidence=confidence,
    )


def _apply_suggestion(
    target: ForeignItem,
    suggestion: AISuggestion | None,
    owned: Mapping[str, WardrobeItem],
    wardrobe: Sequence[WardrobeItem],
) -> MatchResult:
    """AI 제안이 유효하면 사용하고, 아니면 속성 기반 매칭으로 대체

    - missing 제안은 matched_item_id가 붙어 있어도 missing
    - 옷장에 없거나 카테고리가 다른 아이템을 가리키면 속성 기반 매칭
    - exact인데 NEAR_EXACT_CONFIDENCE 미만이면 similar로 낮춤
    - similar가 SIMILAR_MIN_CONFIDENCE 미만이면 속성 기반 매칭
    """
    if suggestion is None:
        return match_item(target, wardrobe)

    if suggestion.match_type == MatchType.MISSING:
        return _missing(target, suggestion.reason or None)

    matched = owned.get(suggestion.matched_item_id or "")
    if matched is None or matched.category.value != normalize_label(target.category):
        logger.debug("Ignoring AI suggestion for %s: invalid item", target.id)
        return match_item(target, wardrobe)

    match_type = suggestion.match_type
    confidence = clamp(round_half_up(suggestion.confidence))
    if match_type == MatchType.EXACT and confidence < NEAR_EXACT_CONFIDENCE:
        match_type = MatchType.SIMILAR
    if match_type == MatchType.SIMILAR:
        if confidence < SIMILAR_MIN_CONFIDENCE:
            logger.debug("Ignoring AI suggestion for %s: confidence %d", target.id, confidence)
            return match_item(target, wardrobe)
        confidence = min(confidence, SIMILAR_MAX_CONFIDENCE)

    return MatchResult(
        original_item=_summarize_foreign(target),
        match_type=match_type,
        matched_item=_summarize_owned(matched),
        match_reason=suggestion.reason or f"Try your {matched.primary_color} {matched.category.value}",
        confidence=confidence,
    )


def overall_score(matches: Sequence[MatchResult]) -> int:
    if not matches:
        return 0
    found = sum(1 for m in matches if m.match_type != MatchType.MISSING)
    return round_half_up(100 * found / len(matches))


def match_look(
    tagged_items: Sequence[ForeignItem],
    wardrobe: Sequence[WardrobeItem],
    suggestions: Mapping[str, AISuggestion] | None = None,
    post_id: str | None = None,
) -> StealLookResult:
    """게시물의 태그 아이템 전체를 내 옷장과 매칭

    같은 입력에 대해 항상 같은 순서, 같은 결과를 반환합니다.
    태그 아이템이 없으면 overall_score=0, can_recreate=False인 빈 결과입니다.
    """
    if not tagged_items:
        return StealLookResult(post_id=post_id, matches=[], overall_score=0, can_recreate=False)

    items = complete_items(list(wardrobe))
    owned = {item.id: item for item in items}
    suggestions = suggestions or {}

    matches = [
        _apply_suggestion(target, suggestions.get(target.id), owned, items)
        for target in tagged_items
    ]

    score = overall_score(matches)
    logger.info(
        "Matched %d tagged items against %d wardrobe items: score=%d",
        len(matches),
        len(items),
        score,
    )

    return StealLookResult(
        post_id=post_id,
        matches=matches,
        overall_score=score,
        can_recreate=score >= RECREATE_THRESHOLD,
    )
