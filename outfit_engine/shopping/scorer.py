"""
호환성 점수 계산기

스캔한 상품이 기존 옷장과 얼마나 잘 어울리는지 0~100 점수로 계산합니다.
단순히 비슷한 옷이 있는지가 아니라, 함께 코디할 아이템이 있는지를 평가합니다.

가중치 (적용되는 요소들의 가중치 합으로 정규화):
- 색상 조화 (COLOR_WEIGHT): 상품 색상 정보가 없으면 제외
- 카테고리 보완 (CATEGORY_WEIGHT): 항상 적용
- 스타일 일관성 (STYLE_WEIGHT): 상품 스타일이 없으면 제외
- 계절 적합도 (SEASON_WEIGHT): 상품 계절 정보가 없으면 제외

매칭 아이템 정렬용 페어링 강도:
- 같은 색상 +3, 뉴트럴 조합 +2, 스타일 일치 +2, 계절 겹침 +1
- 격식 차이가 FORMALITY_TOLERANCE 이내면 +1 (아이템 격식 정보가 없으면 가산 없음)
"""

import logging
from collections.abc import Sequence

from outfit_engine.common.utils import clamp, normalize_label, round_half_up
from outfit_engine.shopping import rules
from outfit_engine.shopping.schemas import (
    CompatibilityRating,
    CompatibilityResult,
    Insight,
    InsightCategory,
    ProductAnalysis,
)
from outfit_engine.wardrobe.schemas import (
    COOL_TONES,
    NEUTRAL_COLORS,
    NEUTRAL_TONES,
    WARM_TONES,
    WardrobeItem,
    complete_items,
    recency_key,
)

logger = logging.getLogger(__name__)

# ============================================================
# 설정 상수
# ============================================================

COLOR_WEIGHT = 0.30
CATEGORY_WEIGHT = 0.30
STYLE_WEIGHT = 0.20
SEASON_WEIGHT = 0.20

NEUTRAL_SCORE = 50  # 옷장이 비었을 때 기본 점수
MIN_SCORABLE_ITEMS = 1
MAX_MATCHING_ITEMS = 10
MAX_INSIGHTS = 5
VERSATILE_MATCH_COUNT = 5
LIMITED_WARDROBE_SIZE = 5
FORMALITY_TOLERANCE = 2

EMPTY_WARDROBE_TIP = "Add more items to your wardrobe for better compatibility analysis."
EMPTY_WARDROBE_EXPLANATION = "Add items to your wardrobe for personalized scoring"

_INSIGHT_PRIORITY = {
    InsightCategory.MATCH: 0,
    InsightCategory.GAP: 1,
    InsightCategory.TIP: 2,
    InsightCategory.WARNING: 3,
}

_RATINGS = [
    CompatibilityRating(label="Perfect Match", min_score=90, max_score=100),
    CompatibilityRating(label="Great Choice", min_score=75, max_score=89),
    CompatibilityRating(label="Good Fit", min_score=60, max_score=74),
    CompatibilityRating(label="Might Work", min_score=40, max_score=59),
    CompatibilityRating(label="Careful", min_score=0, max_score=39),
]


class CompatibilityScorer:
    """상품 한 건과 옷장 스냅샷으로 호환성 결과를 만든다 (상태 없음)"""

    def score(
        self: "CompatibilityScorer",
        analysis: ProductAnalysis,
        wardrobe: Sequence[WardrobeItem],
    ) -> CompatibilityResult:
        items = complete_items(list(wardrobe))

        if len(items) < MIN_SCORABLE_ITEMS:
            logger.info("Wardrobe has no complete items, returning neutral score")
            return CompatibilityResult(
                score=NEUTRAL_SCORE,
                matching_items=[],
                insights=[Insight(category=InsightCategory.TIP, text=EMPTY_WARDROBE_TIP)],
                explanation=EMPTY_WARDROBE_EXPLANATION,
            )

        insights: list[Insight] = []
        factors: list[tuple[float, int]] = []

        color_score = self._score_color(analysis, items, insights)
        if color_score is not None:
            factors.append((COLOR_WEIGHT, color_score))

        factors.append((CATEGORY_WEIGHT, self._score_category(analysis, items, insights)))

        season_score = self._score_season(analysis, items, insights)
        if season_score is not None:
            factors.append((SEASON_WEIGHT, season_score))

        style_score = self._score_style(analysis, items, insights)
        if style_score is not None:
            factors.append((STYLE_WEIGHT, style_score))

        matching_items = self._find_matching_items(analysis, items)
        insights.extend(self._collect_extra_insights(analysis, items, matching_items))

        total_weight = sum(weight for weight, _ in factors)
        weighted = sum(weight * value for weight, value in factors)
        final_score = clamp(round_half_up(weighted / total_weight))

        logger.debug(
            "Scored %s against %d items: factors=%s score=%d",
            analysis.product_name,
            len(items),
            factors,
            final_score,
        )

        return CompatibilityResult(
            score=final_score,
            matching_items=matching_items[:MAX_MATCHING_ITEMS],
            insights=self._finalize_insights(insights),
            explanation=generate_score_explanation(items),
        )

    # ------------------------------------------------------------
    # 요소별 점수
    # ------------------------------------------------------------

    @staticmethod
    def _score_color(
        analysis: ProductAnalysis,
        items: list[WardrobeItem],
        insights: list[Insight],
    ) -> int | None:
        if not rules.has_color(analysis):
            return None

        colors = rules.product_colors(analysis)
        wardrobe_colors = {c for item in items for c in item.colors}

        if any(c in NEUTRAL_COLORS for c in colors):
            insights.append(
                Insight(
                    category=InsightCategory.MATCH,
                    text="Neutral color - pairs with almost anything in your wardrobe.",
                )
            )
            return 90
        if any(c in wardrobe_colors for c in colors):
            insights.append(
                Insight(
                    category=InsightCategory.MATCH,
                    text=f"You already have {analysis.color} items - great for coordinated looks.",
                )
            )
            return 80
        if any(c in NEUTRAL_COLORS for c in wardrobe_colors):
            insights.append(
                Insight(
                    category=InsightCategory.TIP,
                    text=f"Your neutral items will pair well with this {analysis.color} piece.",
                )
            )
            return 65

        insights.append(
            Insight(
                category=InsightCategory.WARNING,
                text=f"{analysis.color} is a new color for your wardrobe - fewer pairing options.",
            )
        )
        return 35

    @staticmethod
    def _score_category(
        analysis: ProductAnalysis,
        items: list[WardrobeItem],
        insights: list[Insight],
    ) -> int:
        owned = {item.category for item in items}
        matching = [c for c in rules.complements(analysis.category) if c in owned]

        if len(matching) >= 2:
            names = " and ".join(c.value for c in matching)
            insights.append(
                Insight(category=InsightCategory.MATCH, text=f"You have plenty of {names} to pair with this.")
            )
            return 90
        if len(matching) == 1:
            insights.append(
                Insight(category=InsightCategory.TIP, text=f"Pairs with your {matching[0].value} collection.")
            )
            return 65

        insights.append(
            Insight(
                category=InsightCategory.GAP,
                text=f"You might need complementary items to go with this {analysis.category.value} piece.",
            )
        )
        return 30

    @staticmethod
    def _score_season(
        analysis: ProductAnalysis,
        items: list[WardrobeItem],
        insights: list[Insight],
    ) -> int | None:
        seasons = [normalize_label(s) for s in analysis.season if normalize_label(s)]
        if not seasons:
            return None

        wardrobe_seasons = {normalize_label(s) for item in items for s in item.seasons}
        overlap = [s for s in seasons if s in wardrobe_seasons]

        if len(overlap) == len(seasons):
            return 85
        if overlap:
            insights.append(
                Insight(category=InsightCategory.TIP, text=f"Fits your wardrobe for {', '.join(overlap)}.")
            )
            return 65

        insights.append(
            Insight(category=InsightCategory.WARNING, text="Most of your wardrobe is for different seasons.")
        )
        return 40

    @staticmethod
    def _score_style(
        analysis: ProductAnalysis,
        items: list[WardrobeItem],
        insights: list[Insight],
    ) -> int | None:
        if not normalize_label(analysis.style):
            return None

        if any(rules.style_aligned(analysis, item) for item in items):
            return 80

        has_style_data = any(item.style or item.occasions for item in items)
        if not has_style_data:
            return 60

        insights.append(
            Insight(
                category=InsightCategory.WARNING,
                text=f"This {analysis.style} style differs from your usual pieces.",
            )
        )
        return 40

    # ------------------------------------------------------------
    # 매칭 아이템 / 추가 인사이트
    # ------------------------------------------------------------

    @staticmethod
    def _pairing_strength(analysis: ProductAnalysis, item: WardrobeItem) -> int:
        strength = 0
        if rules.shares_color(analysis, item):
            strength += 3
        if rules.neutral_pairing(analysis, item):
            strength += 2
        if rules.style_aligned(analysis, item):
            strength += 2

        seasons = {normalize_label(s) for s in analysis.season}
        if seasons & {normalize_label(s) for s in item.seasons}:
            strength += 1

        if item.formality is not None and abs(item.formality - analysis.formality) <= FORMALITY_TOLERANCE:
            strength += 1
        return strength

    def _find_matching_items(
        self: "CompatibilityScorer",
        analysis: ProductAnalysis,
        items: list[WardrobeItem],
    ) -> list[WardrobeItem]:
        complement_set = set(rules.complements(analysis.category))
        color_known = rules.has_color(analysis)

        matches = [
            item
            for item in items
            if item.category in complement_set
            and (
                not color_known
                or rules.neutral_pairing(analysis, item)
                or rules.shares_color(analysis, item)
            )
        ]

        # 매칭 강도 내림차순, 동점이면 최근 등록 아이템 우선
        return sorted(
            matches,
            key=lambda item: (-self._pairing_strength(analysis, item), *recency_key(item)),
        )

    @staticmethod
    def _collect_extra_insights(
        analysis: ProductAnalysis,
        items: list[WardrobeItem],
        matching_items: list[WardrobeItem],
    ) -> list[Insight]:
        extra: list[Insight] = []
        count = len(matching_items)

        if count > 0:
            plural = "s" if count > 1 else ""
            extra.append(
                Insight(
                    category=InsightCategory.MATCH,
                    text=f"{count} item{plural} in your wardrobe would pair well with this.",
                )
            )

        # 활용도
        if count >= VERSATILE_MATCH_COUNT:
            extra.append(
                Insight(
                    category=InsightCategory.TIP,
                    text="High versatility - this pairs with many items. Great cost-per-wear potential.",
                )
            )
        elif count <= 1 and len(items) >= LIMITED_WARDROBE_SIZE:
            extra.append(
                Insight(
                    category=InsightCategory.WARNING,
                    text="Limited pairing options. You might not wear this often.",
                )
            )

        # 이미 비슷한 아이템을 가지고 있는지
        if rules.has_color(analysis):
            color = normalize_label(analysis.color)
            overlapping = [
                item for item in items
                if item.category == analysis.category and color in item.colors
            ]
            if overlapping:
                first = overlapping[0]
                name = first.name or f"{first.primary_color} {first.category.value}"
                extra.append(
                    Insight(
                        category=InsightCategory.WARNING,
                        text=f"This overlaps with your {name}. Do you need both?",
                    )
                )

        # 부족한 보완 카테고리
        owned = {item.category for item in items}
        complements = rules.complements(analysis.category)
        missing = [c for c in complements if c not in owned]
        if missing and len(missing) == len(complements):
            extra.append(
                Insight(
                    category=InsightCategory.GAP,
                    text=f"You don't have {missing[0].value} to match this. Consider adding some to complete outfits.",
                )
            )

        return extra

    @staticmethod
    def _finalize_insights(insights: list[Insight]) -> list[Insight]:
        """우선순위 정렬, 첫 글자 대문자 및 마침표 보정 후 최대 MAX_INSIGHTS개 반환"""
        ordered = sorted(insights, key=lambda i: _INSIGHT_PRIORITY[i.category])

        formatted: list[Insight] = []
        for insight in ordered[:MAX_INSIGHTS]:
            text = insight.text[:1].upper() + insight.text[1:]
            if not text.endswith((".", "!", "?")):
                text += "."
            formatted.append(Insight(category=insight.category, text=text))
        return formatted


def generate_score_explanation(items: Sequence[WardrobeItem]) -> str:
    """옷장의 색상 톤과 스타일 성향을 한 문장으로 요약"""
    if not items:
        return EMPTY_WARDROBE_EXPLANATION

    warm = cool = neutral = 0
    for item in items:
        for color in item.colors:
            if color in WARM_TONES:
                warm += 1
            elif color in COOL_TONES:
                cool += 1
            elif color in NEUTRAL_TONES:
                neutral += 1

    total = warm + cool + neutral
    color_tone = "varied"
    if total > 0:
        if neutral / total > 0.5:
            color_tone = "neutral"
        elif warm / total > 0.5:
            color_tone = "warm-toned"
        elif cool / total > 0.5:
            color_tone = "cool-toned"

    tags = [normalize_label(o) for item in items for o in item.occasions]
    tags += [normalize_label(item.style) for item in items if item.style]
    casual_count = sum(1 for t in tags if t in ("casual", "everyday"))
    formal_count = sum(1 for t in tags if t in ("formal", "business"))

    style_tone = "mixed-style"
    if casual_count > formal_count * 2:
        style_tone = "casual"
    elif formal_count > casual_count * 2:
        style_tone = "formal"

    return f"Based on your {color_tone}, {style_tone} wardrobe"


def get_compatibility_rating(score: float) -> CompatibilityRating:
    clamped = clamp(round_half_up(score))
    for rating in _RATINGS:
        if rating.min_score <= clamped <= rating.max_score:
            return rating
    return _RATINGS[-1]


def score_compatibility(
    analysis: ProductAnalysis,
    wardrobe: Sequence[WardrobeItem],
) -> CompatibilityResult:
    return CompatibilityScorer().score(analysis, wardrobe)
