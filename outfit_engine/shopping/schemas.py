"""
Shopping 모듈 스키마 정의
- ProductAnalysis: 스캔한 상품의 구조화된 속성 (외부 추출 단계의 결과)
- CompatibilityResult: 옷장 대비 호환성 점수 / 매칭 아이템 / 인사이트
- ShoppingScan / ScanStatistics: 스캔 기록 및 통계
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from outfit_engine.common.schemas import BaseSchema
from outfit_engine.wardrobe.schemas import Category, WardrobeItem


# ============================================================
# 공통 Enum 정의
# ============================================================

class InsightCategory(str, Enum):
    """인사이트 분류 (정렬 우선순위: match -> gap -> tip -> warning)"""
    MATCH = "match"
    GAP = "gap"
    TIP = "tip"
    WARNING = "warning"


class ScanMethod(str, Enum):
    SCREENSHOT = "screenshot"
    URL = "url"


# ============================================================
# 1. 상품 분석 / 호환성 점수
# ============================================================

class ProductAnalysis(BaseSchema):
    product_name: str = Field(..., description="상품명")
    product_brand: str | None = Field(default=None, description="브랜드")
    category: Category = Field(..., description="카테고리")
    color: str = Field(default="", description="대표 색상 (없으면 빈 값 또는 Unknown)")
    secondary_colors: list[str] = Field(default_factory=list, description="보조 색상")
    style: str = Field(default="", description="스타일 (casual, formal 등)")
    material: str | None = Field(default=None, description="소재")
    pattern: str = Field(default="solid", description="패턴")
    season: list[str] = Field(default_factory=list, description="계절")
    formality: int = Field(default=5, ge=1, le=10, description="격식 점수 (1~10)")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0, description="추출 신뢰도")
    user_edited: bool = Field(default=False, description="사용자가 수정했는지 여부")


class Insight(BaseSchema):
    category: InsightCategory = Field(..., description="인사이트 분류")
    text: str = Field(..., description="사용자에게 보여줄 문장")


class CompatibilityResult(BaseSchema):
    score: int = Field(..., ge=0, le=100, description="호환성 점수 (0~100)")
    matching_items: list[WardrobeItem] = Field(
        default_factory=list, description="함께 입기 좋은 옷장 아이템 (매칭 강도순)"
    )
    insights: list[Insight] = Field(default_factory=list, description="인사이트 목록")
    explanation: str = Field(default="", description="옷장 성향 기반 한 줄 설명")


class CompatibilityRating(BaseSchema):
    label: str
    min_score: int
    max_score: int


class CompatibilityRequest(BaseSchema):
    analysis: ProductAnalysis = Field(..., description="스캔한 상품")
    wardrobe: list[WardrobeItem] = Field(default_factory=list, description="옷장 스냅샷")


class CompatibilityResponse(CompatibilityResult):
    rating: CompatibilityRating = Field(..., description="점수 구간 라벨")


class MatchReasonItem(BaseSchema):
    item: WardrobeItem
    reason: str


class MatchReasonGroup(BaseSchema):
    category: Category
    items: list[MatchReasonItem] = Field(default_factory=list)


class MatchReasonsRequest(BaseSchema):
    analysis: ProductAnalysis
    items: list[WardrobeItem] = Field(default_factory=list)


class MatchReasonsResponse(BaseSchema):
    groups: list[MatchReasonGroup] = Field(default_factory=list)


# ============================================================
# 2. 스캔 기록
# ============================================================

class ShoppingScan(BaseSchema):
    id: str
    user_id: str
    product_name: str | None = None
    product_brand: str | None = None
    product_url: str | None = None
    product_image_url: str | None = None
    category: str | None = None
    color: str | None = None
    secondary_colors: list[str] = Field(default_factory=list)
    style: str | None = None
    material: str | None = None
    pattern: str | None = None
    season: list[str] = Field(default_factory=list)
    formality: int | None = Field(default=None, ge=1, le=10)
    price_amount: float | None = None
    price_currency: str = "GBP"
    compatibility_score: int | None = Field(default=None, ge=0, le=100)
    matching_item_ids: list[str] = Field(default_factory=list)
    ai_insights: list[Insight] | None = None
    scan_method: ScanMethod
    user_rating: int | None = Field(default=None, ge=1, le=5)
    is_wishlisted: bool = False
    created_at: datetime


class ScanStatistics(BaseSchema):
    total_scans: int
    avg_score: int
    wishlisted_count: int
    top_category: str | None = None


class ScanStatisticsRequest(BaseSchema):
    scans: list[ShoppingScan] = Field(default_factory=list, description="스캔 기록")
