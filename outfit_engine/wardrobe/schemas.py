"""
Wardrobe 공통 스키마 정의
- Category / ItemStatus: 아이템 분류 및 처리 상태
- WardrobeItem: 사용자가 보유한 의류 한 벌 (엔진 입력 스냅샷)
- 색상 어휘: 뉴트럴 / 웜 / 쿨 톤 및 색상 계열 매핑
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from outfit_engine.common.schemas import BaseSchema
from outfit_engine.common.utils import normalize_label


# ============================================================
# 공통 Enum 정의
# ============================================================

class Category(str, Enum):
    """의류 카테고리"""
    TOPS = "tops"
    BOTTOMS = "bottoms"
    DRESSES = "dresses"
    OUTERWEAR = "outerwear"
    SHOES = "shoes"
    ACCESSORIES = "accessories"


class ItemStatus(str, Enum):
    """아이템 처리 상태 (complete만 엔진 계산에 사용)"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"


# ============================================================
# 색상 어휘
# ============================================================

# 어떤 색과도 어울리는 뉴트럴 컬러
NEUTRAL_COLORS = frozenset(
    ["black", "white", "gray", "grey", "navy", "beige", "cream", "tan"]
)

# 옷장 톤 분류용
WARM_TONES = frozenset(
    [
        "red", "orange", "yellow", "coral", "rust", "burgundy",
        "maroon", "mustard", "camel", "tan", "brown",
    ]
)
COOL_TONES = frozenset(
    [
        "blue", "navy", "teal", "purple", "lavender", "indigo",
        "cobalt", "turquoise", "emerald",
    ]
)
NEUTRAL_TONES = frozenset(
    [
        "black", "white", "gray", "grey", "beige", "cream",
        "ivory", "taupe", "charcoal", "nude",
    ]
)

# 세부 색상 -> 색상 계열 (계열이 같으면 "비슷한 색"으로 취급)
COLOR_FAMILIES: dict[str, str] = {
    "navy": "blue",
    "cobalt": "blue",
    "indigo": "blue",
    "light blue": "blue",
    "sky blue": "blue",
    "denim": "blue",
    "teal": "green",
    "olive": "green",
    "sage": "green",
    "emerald": "green",
    "khaki": "green",
    "burgundy": "red",
    "maroon": "red",
    "coral": "red",
    "rust": "orange",
    "mustard": "yellow",
    "lavender": "purple",
    "blush": "pink",
    "grey": "gray",
    "charcoal": "gray",
    "cream": "beige",
    "ivory": "white",
    "off white": "white",
    "tan": "beige",
    "camel": "brown",
    "taupe": "brown",
    "nude": "beige",
    "turquoise": "blue",
}


def color_family(color: str | None) -> str:
    """색상 문자열을 대표 계열로 변환 (모르는 색은 그대로 반환)"""
    key = normalize_label(color)
    return COLOR_FAMILIES.get(key, key)


def is_neutral(color: str | None) -> bool:
    return normalize_label(color) in NEUTRAL_COLORS


def is_known_color(color: str | None) -> bool:
    """빈 값이나 'Unknown'은 색상 정보가 없는 것으로 취급"""
    key = normalize_label(color)
    return bool(key) and key != "unknown"


# ============================================================
# WardrobeItem
# ============================================================

class WardrobeItem(BaseSchema):
    id: str = Field(..., description="아이템 ID")
    name: str | None = Field(default=None, description="아이템 이름")
    brand: str | None = Field(default=None, description="브랜드")
    category: Category = Field(..., description="카테고리")
    sub_category: str | None = Field(default=None, description="세부 카테고리 (blazer, jeans 등)")
    color: str | None = Field(default=None, description="대표 색상")
    secondary_colors: list[str] = Field(default_factory=list, description="보조 색상 목록")
    style: str | None = Field(default=None, description="스타일 태그")
    material: str | None = Field(default=None, description="소재")
    pattern: str | None = Field(default=None, description="패턴")
    seasons: list[str] = Field(default_factory=list, description="착용 계절")
    occasions: list[str] = Field(default_factory=list, description="착용 상황")
    formality: int | None = Field(default=None, ge=1, le=10, description="격식 점수 (1~10)")
    status: ItemStatus = Field(default=ItemStatus.COMPLETE, description="처리 상태")
    image_url: str | None = Field(default=None, description="원본 이미지 URL")
    processed_image_url: str | None = Field(default=None, description="배경 제거 이미지 URL")
    created_at: datetime | None = Field(default=None, description="등록 시각")

    @property
    def colors(self: "WardrobeItem") -> list[str]:
        """대표 색상 + 보조 색상 (소문자, 빈 값 제외)"""
        values = [self.color, *self.secondary_colors]
        return [normalize_label(c) for c in values if normalize_label(c)]

    @property
    def primary_color(self: "WardrobeItem") -> str:
        return normalize_label(self.color) or "unknown"

    @property
    def display_image_url(self: "WardrobeItem") -> str:
        return self.processed_image_url or self.image_url or ""

    @property
    def is_complete(self: "WardrobeItem") -> bool:
        return self.status == ItemStatus.COMPLETE


def complete_items(items: list[WardrobeItem]) -> list[WardrobeItem]:
    """처리 완료된 아이템만 남김"""
    return [item for item in items if item.is_complete]


def recency_key(item: WardrobeItem) -> tuple[float, str]:
    """동점일 때 최근 등록 아이템 우선, 그 다음 ID 오름차순 (정렬 키용)"""
    timestamp = item.created_at.timestamp() if item.created_at else float("-inf")
    return (-timestamp, item.id)
