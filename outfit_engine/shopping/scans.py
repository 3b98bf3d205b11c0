import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone

from outfit_engine.common.utils import round_half_up
from outfit_engine.shopping.schemas import (
    CompatibilityResult,
    ProductAnalysis,
    ScanMethod,
    ScanStatistics,
    ShoppingScan,
)


def build_scan_record(
    user_id: str,
    analysis: ProductAnalysis,
    result: CompatibilityResult,
    scan_method: ScanMethod,
    product_url: str | None = None,
    product_image_url: str | None = None,
    price_amount: float | None = None,
    price_currency: str = "GBP",
    scan_id: str | None = None,
    now: datetime | None = None,
) -> ShoppingScan:
    """상품 분석 + 호환성 결과를 저장용 스캔 레코드로 변환 (저장은 호출 측 책임)"""
    return ShoppingScan(
        id=scan_id or str(uuid.uuid4()),
        user_id=user_id,
        product_name=analysis.product_name,
        product_brand=analysis.product_brand,
        product_url=product_url,
        product_image_url=product_image_url,
        category=analysis.category.value,
        color=analysis.color or None,
        secondary_colors=list(analysis.secondary_colors),
        style=analysis.style or None,
        material=analysis.material,
        pattern=analysis.pattern or None,
        season=list(analysis.season),
        formality=analysis.formality,
        price_amount=price_amount,
        price_currency=price_currency,
        compatibility_score=result.score,
        matching_item_ids=[item.id for item in result.matching_items],
        ai_insights=list(result.insights),
        scan_method=scan_method,
        created_at=now or datetime.now(timezone.utc),
    )


def compute_scan_statistics(scans: Sequence[ShoppingScan]) -> ScanStatistics:
    scored = [s.compatibility_score for s in scans if s.compatibility_score is not None]
    avg_score = round_half_up(sum(scored) / len(scored)) if scored else 0

    # 가장 많이 스캔한 카테고리 (동률이면 먼저 등장한 카테고리)
    counts = Counter(s.category for s in scans if s.category)
    top_category = counts.most_common(1)[0][0] if counts else None

    return ScanStatistics(
        total_scans=len(scans),
        avg_score=avg_score,
        wishlisted_count=sum(1 for s in scans if s.is_wishlisted),
        top_category=top_category,
    )
