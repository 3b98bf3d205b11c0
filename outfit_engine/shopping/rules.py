"""상품-옷장 페어링 판단에 쓰는 공통 규칙 (Scorer와 Match Reasoner가 공유)"""

from outfit_engine.common.utils import normalize_label
from outfit_engine.shopping.schemas import ProductAnalysis
from outfit_engine.wardrobe.schemas import (
    NEUTRAL_COLORS,
    Category,
    WardrobeItem,
    is_known_color,
)

# 해당 카테고리 상품과 함께 코디하기 좋은 카테고리
COMPLEMENT_CATEGORIES: dict[Category, list[Category]] = {
    Category.TOPS: [Category.BOTTOMS, Category.OUTERWEAR, Category.ACCESSORIES],
    Category.BOTTOMS: [Category.TOPS, Category.OUTERWEAR, Category.SHOES],
    Category.DRESSES: [Category.OUTERWEAR, Category.SHOES, Category.ACCESSORIES],
    Category.OUTERWEAR: [Category.TOPS, Category.BOTTOMS, Category.DRESSES],
    Category.SHOES: [Category.BOTTOMS, Category.DRESSES, Category.TOPS],
    Category.ACCESSORIES: [Category.TOPS, Category.DRESSES, Category.OUTERWEAR],
}

# 스타일 태그 -> 관련 착용 상황
STYLE_TO_OCCASIONS: dict[str, list[str]] = {
    "casual": ["casual", "everyday"],
    "formal": ["formal", "business"],
    "smart-casual": ["casual", "business", "date-night"],
    "sporty": ["casual", "everyday"],
    "bohemian": ["casual", "festival"],
    "streetwear": ["casual", "everyday"],
    "classic": ["business", "formal", "casual"],
    "minimalist": ["casual", "business", "everyday"],
}


def has_color(analysis: ProductAnalysis) -> bool:
    return is_known_color(analysis.color)


def product_colors(analysis: ProductAnalysis) -> list[str]:
    """상품의 대표 + 보조 색상 (색상 정보가 없으면 빈 목록)"""
    if not has_color(analysis):
        return []
    values = [analysis.color, *analysis.secondary_colors]
    return [normalize_label(c) for c in values if normalize_label(c)]


def complements(category: Category) -> list[Category]:
    return COMPLEMENT_CATEGORIES.get(category, [])


def related_occasions(style: str | None) -> list[str]:
    return STYLE_TO_OCCASIONS.get(normalize_label(style), [])


def style_aligned(analysis: ProductAnalysis, item: WardrobeItem) -> bool:
    """스타일 태그가 같거나, 상품 스타일과 관련된 착용 상황을 아이템이 가지고 있는지"""
    style = normalize_label(analysis.style)
    if not style:
        return False
    if normalize_label(item.style) == style:
        return True
    occasions = related_occasions(style)
    return any(normalize_label(o) in occasions for o in item.occasions)


def shares_color(analysis: ProductAnalysis, item: WardrobeItem) -> bool:
    item_colors = set(item.colors)
    return any(c in item_colors for c in product_colors(analysis))


def neutral_pairing(analysis: ProductAnalysis, item: WardrobeItem) -> bool:
    """상품 또는 아이템 어느 한쪽이 뉴트럴 컬러"""
    if any(c in NEUTRAL_COLORS for c in product_colors(analysis)):
        return True
    return any(c in NEUTRAL_COLORS for c in item.colors)
