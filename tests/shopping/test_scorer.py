"""
호환성 점수 계산기 테스트
"""

from datetime import datetime, timedelta, timezone

import pytest

from outfit_engine.shopping.schemas import InsightCategory, ProductAnalysis
from outfit_engine.shopping.scorer import (
    EMPTY_WARDROBE_TIP,
    MAX_INSIGHTS,
    MAX_MATCHING_ITEMS,
    NEUTRAL_SCORE,
    CompatibilityScorer,
    generate_score_explanation,
    get_compatibility_rating,
    score_compatibility,
)
from outfit_engine.wardrobe.schemas import WardrobeItem


def _analysis(**overrides) -> ProductAnalysis:
    data = {"product_name": "Test Product", "category": "tops"}
    data.update(overrides)
    return ProductAnalysis(**data)


@pytest.fixture
def scorer() -> CompatibilityScorer:
    return CompatibilityScorer()


class TestEmptyWardrobe:
    def test_empty_wardrobe_returns_neutral_score(self, scorer):
        result = scorer.score(_analysis(color="red"), [])

        assert result.score == NEUTRAL_SCORE == 50
        assert result.matching_items == []
        assert len(result.insights) == 1
        assert result.insights[0].category == InsightCategory.TIP
        assert result.insights[0].text == EMPTY_WARDROBE_TIP
        assert "Add more items" in result.insights[0].text

    def test_only_pending_items_counts_as_empty(self, scorer, sample_wardrobe):
        pending_only = [item for item in sample_wardrobe if not item.is_complete]

        result = scorer.score(_analysis(color="black"), pending_only)

        assert result.score == 50
        assert result.insights[0].text == EMPTY_WARDROBE_TIP


class TestScore:
    def test_neutral_top_against_sample_wardrobe(self, scorer, sample_wardrobe):
        # Given: 색상 90, 카테고리 65, 스타일 80 (계절 정보 없음 -> 제외)
        analysis = _analysis(color="black", style="casual", formality=4)

        # When
        result = scorer.score(analysis, sample_wardrobe)

        # Then: (0.3*90 + 0.3*65 + 0.2*80) / 0.8 = 78.125
        assert result.score == 78
        assert [item.id for item in result.matching_items] == ["w2"]
        assert [i.text for i in result.insights] == [
            "Neutral color - pairs with almost anything in your wardrobe.",
            "1 item in your wardrobe would pair well with this.",
            "Pairs with your bottoms collection.",
        ]
        assert result.explanation == "Based on your neutral, casual wardrobe"

    def test_unknown_color_is_excluded(self, scorer, sample_wardrobe):
        result = scorer.score(_analysis(color="Unknown"), sample_wardrobe)

        # 카테고리 점수(65)만 적용
        assert result.score == 65
        assert not any("color" in i.text.lower() for i in result.insights)

    def test_new_color_warning_is_capitalized(self, scorer):
        wardrobe = [WardrobeItem(id="g1", category="bottoms", color="green")]

        result = scorer.score(_analysis(color="purple"), wardrobe)

        assert result.score == 50
        assert result.matching_items == []
        texts = [i.text for i in result.insights]
        assert "Purple is a new color for your wardrobe - fewer pairing options." in texts

    def test_score_is_integer_in_range(self, scorer, sample_wardrobe):
        for category in ("tops", "bottoms", "dresses", "outerwear", "shoes", "accessories"):
            result = scorer.score(
                _analysis(category=category, color="orange", style="formal", season=["summer"]),
                sample_wardrobe,
            )
            assert isinstance(result.score, int)
            assert 0 <= result.score <= 100

    def test_scoring_is_deterministic(self, scorer, sample_wardrobe):
        analysis = _analysis(color="navy", style="classic", season=["autumn"])

        assert scorer.score(analysis, sample_wardrobe) == scorer.score(analysis, sample_wardrobe)


class TestMatchingItems:
    def test_sorted_by_pairing_strength(self, scorer, sample_wardrobe):
        # w4: 같은 흰색 + 뉴트럴 -> 5, w1: 뉴트럴 + 격식 근접 -> 3, w3: 뉴트럴 -> 2
        result = scorer.score(_analysis(category="bottoms", color="white"), sample_wardrobe)

        assert [item.id for item in result.matching_items] == ["w4", "w1", "w3"]

    def test_pending_items_never_match(self, scorer, sample_wardrobe):
        result = scorer.score(_analysis(category="tops", color="red"), sample_wardrobe)

        assert "w5" not in [item.id for item in result.matching_items]

    def test_ties_prefer_recent_then_lowest_id(self, scorer):
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        wardrobe = [
            WardrobeItem(id="b", category="bottoms", color="black", created_at=base),
            WardrobeItem(id="a", category="bottoms", color="black", created_at=base),
            WardrobeItem(id="c", category="bottoms", color="black", created_at=base + timedelta(days=1)),
            WardrobeItem(id="d", category="bottoms", color="black"),
        ]

        result = scorer.score(_analysis(color="black"), wardrobe)

        assert [item.id for item in result.matching_items] == ["c", "a", "b", "d"]

    def test_capped_at_max(self, scorer):
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        wardrobe = [
            WardrobeItem(
                id=f"top-{i:02d}",
                category="tops",
                color="black",
                created_at=base + timedelta(days=i),
            )
            for i in range(12)
        ]

        result = scorer.score(_analysis(category="bottoms", color="black"), wardrobe)

        assert len(result.matching_items) == MAX_MATCHING_ITEMS
        assert result.matching_items[0].id == "top-11"
        assert any(i.text.startswith("High versatility") for i in result.insights)


class TestInsights:
    def test_capped_and_ordered_by_priority(self, scorer):
        # Given: 모든 요소가 낮게 나오는 옷장 (신발만 5켤레)
        wardrobe = [
            WardrobeItem(id=f"s{i}", category="shoes", color="green", style="casual", seasons=["winter"])
            for i in range(5)
        ]
        analysis = _analysis(color="purple", style="formal", season=["summer"])

        # When
        result = scorer.score(analysis, wardrobe)

        # Then
        assert len(result.insights) == MAX_INSIGHTS
        assert [i.category for i in result.insights] == [
            InsightCategory.GAP,
            InsightCategory.GAP,
            InsightCategory.WARNING,
            InsightCategory.WARNING,
            InsightCategory.WARNING,
        ]
        assert get_compatibility_rating(result.score).label == "Careful"

    def test_every_insight_is_sentence(self, scorer, sample_wardrobe):
        result = scorer.score(_analysis(color="navy", season=["autumn", "summer"]), sample_wardrobe)

        for insight in result.insights:
            assert insight.text[0].isupper()
            assert insight.text.endswith((".", "!", "?"))

    def test_overlap_warning_uses_item_name(self, scorer, sample_wardrobe):
        result = scorer.score(_analysis(color="navy"), sample_wardrobe)

        assert "This overlaps with your Navy Blazer. Do you need both?" in [
            i.text for i in result.insights
        ]


class TestExplanation:
    def test_empty(self):
        assert generate_score_explanation([]) == "Add items to your wardrobe for personalized scoring"

    def test_warm_formal(self):
        items = [
            WardrobeItem(id="1", category="tops", color="red", occasions=["business"]),
            WardrobeItem(id="2", category="bottoms", color="brown", style="formal"),
        ]

        assert generate_score_explanation(items) == "Based on your warm-toned, formal wardrobe"

    def test_no_signal_is_varied_mixed(self):
        items = [WardrobeItem(id="1", category="tops")]

        assert generate_score_explanation(items) == "Based on your varied, mixed-style wardrobe"


class TestRating:
    @pytest.mark.parametrize(
        ("score", "label"),
        [
            (100, "Perfect Match"),
            (90, "Perfect Match"),
            (89, "Great Choice"),
            (75, "Great Choice"),
            (74, "Good Fit"),
            (60, "Good Fit"),
            (59, "Might Work"),
            (40, "Might Work"),
            (39, "Careful"),
            (0, "Careful"),
        ],
    )
    def test_bands(self, score, label):
        assert get_compatibility_rating(score).label == label

    def test_out_of_range_is_clamped(self):
        assert get_compatibility_rating(150).label == "Perfect Match"
        assert get_compatibility_rating(-5).label == "Careful"

    def test_module_helper_matches_scorer(self, sample_wardrobe):
        analysis = _analysis(color="black")

        assert score_compatibility(analysis, sample_wardrobe) == CompatibilityScorer().score(
            analysis, sample_wardrobe
        )
