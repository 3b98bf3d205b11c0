from enum import Enum

from pydantic import Field

from outfit_engine.common.schemas import BaseSchema
from outfit_engine.wardrobe.schemas import WardrobeItem


class MatchType(str, Enum):
    EXACT = "exact"
    SIMILAR = "similar"
    MISSING = "missing"


class ForeignItem(BaseSchema):
    """다른 사용자의 게시물에 태그된 아이템 (공개 속성만)"""
    id: str = Field(..., description="아이템 ID")
    name: str | None = Field(default=None, description="아이템 이름")
    category: str | None = Field(default=None, description="카테고리")
    sub_category: str | None = Field(default=None, description="세부 카테고리")
    colors: list[str] = Field(default_factory=list, description="색상 목록 (첫 번째가 대표 색상)")
    image_url: str = Field(default="", description="이미지 URL")


class ItemSummary(BaseSchema):
    id: str
    name: str | None = None
    category: str
    color: str
    image_url: str


class MatchResult(BaseSchema):
    original_item: ItemSummary = Field(..., description="게시물의 원본 아이템")
    match_type: MatchType = Field(..., description="exact / similar / missing")
    matched_item: ItemSummary | None = Field(default=None, description="내 옷장에서 찾은 아이템")
    match_reason: str = Field(..., description="매칭 이유")
    confidence: int = Field(..., ge=0, le=100, description="신뢰도 (0~100)")


class StealLookResult(BaseSchema):
    post_id: str | None = Field(default=None, description="게시물 ID")
    matches: list[MatchResult] = Field(default_factory=list)
    overall_score: int = Field(..., ge=0, le=100, description="재현 가능 비율 (0~100)")
    can_recreate: bool = Field(..., description="재현 가능 여부")


class AISuggestion(BaseSchema):
    """AI 분류기가 타깃 아이템 하나에 대해 제안한 매칭"""
    target_id: str
    matched_item_id: str | None = None
    match_type: MatchType
    confidence: float = 0
    reason: str = ""


class StealLookRequest(BaseSchema):
    post_id: str | None = Field(default=None, description="게시물 ID")
    tagged_items: list[ForeignItem] = Field(default_factory=list, description="게시물에 태그된 아이템")
    wardrobe: list[WardrobeItem] = Field(default_factory=list, description="내 옷장 스냅샷")
