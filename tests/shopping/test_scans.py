from datetime import datetime, timezone

import pytest

from outfit_engine.shopping.scans import build_scan_record, compute_scan_statistics
from outfit_engine.shopping.schemas import (
    CompatibilityResult,
    Insight,
    InsightCategory,
    ProductAnalysis,
    ScanMethod,
    ShoppingScan,
)
from outfit_engine.wardrobe.schemas import WardrobeItem

NOW = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)


def _scan(scan_id, category=None, score=None, wishlisted=False) -> ShoppingScan:
    return ShoppingScan(
        id=scan_id,
        user_id="user-1",
        category=category,
        compatibility_score=score,
        is_wishlisted=wishlisted,
        scan_method=ScanMethod.SCREENSHOT,
        created_at=NOW,
    )


class TestBuildScanRecord:
    def test_copies_analysis_and_result(self):
        # Given
        analysis = ProductAnalysis(
            product_name="Wool Coat",
            product_brand="COS",
            category="outerwear",
            color="camel",
            style="classic",
            season=["autumn", "winter"],
            formality=6,
        )
        result = CompatibilityResult(
            score=82,
            matching_items=[
                WardrobeItem(id="w1", category="tops"),
                WardrobeItem(id="w2", category="bottoms"),
            ],
            insights=[Insight(category=InsightCategory.MATCH, text="Great.")],
            explanation="Based on your neutral, casual wardrobe",
        )

        # When
        scan = build_scan_record(
            "user-1",
            analysis,
            result,
            ScanMethod.URL,
            product_url="https://shop.example.com/coat",
            price_amount=120.0,
            scan_id="scan-1",
            now=NOW,
        )

        # Then
        assert scan.id == "scan-1"
        assert scan.category == "outerwear"
        assert scan.color == "camel"
        assert scan.compatibility_score == 82
        assert scan.matching_item_ids == ["w1", "w2"]
        assert scan.ai_insights[0].text == "Great."
        assert scan.price_currency == "GBP"
        assert scan.scan_method == ScanMethod.URL
        assert scan.is_wishlisted is False
        assert scan.created_at == NOW

    def test_empty_color_stored_as_none(self):
        analysis = ProductAnalysis(product_name="Mystery", category="tops")
        result = CompatibilityResult(score=50)

        scan = build_scan_record("user-1", analysis, result, ScanMethod.SCREENSHOT)

        assert scan.color is None
        assert scan.id


class TestScanStatistics:
    def test_empty(self):
        stats = compute_scan_statistics([])

        assert stats.total_scans == 0
        assert stats.avg_score == 0
        assert stats.wishlisted_count == 0
        assert stats.top_category is None

    def test_aggregates(self):
        scans = [
            _scan("1", "tops", 80, wishlisted=True),
            _scan("2", "shoes", 71),
            _scan("3", "shoes", None, wishlisted=True),
            _scan("4", "tops", 60),
            _scan("5", "shoes", 62),
        ]

        stats = compute_scan_statistics(scans)

        assert stats.total_scans == 5
        # (80 + 71 + 60 + 62) / 4 = 68.25
        assert stats.avg_score == 68
        assert stats.wishlisted_count == 2
        assert stats.top_category == "shoes"

    def test_average_rounds_half_up(self):
        stats = compute_scan_statistics([_scan("1", score=70), _scan("2", score=71)])

        assert stats.avg_score == 71

    @pytest.mark.parametrize("first", ["tops", "bottoms"])
    def test_top_category_tie_goes_to_first_seen(self, first):
        other = "bottoms" if first == "tops" else "tops"
        scans = [_scan("1", first), _scan("2", other)]

        assert compute_scan_statistics(scans).top_category == first
