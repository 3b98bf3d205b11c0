from datetime import datetime
from enum import Enum

from pydantic import Field

from outfit_engine.common.schemas import BaseSchema


class Position(str, Enum):
    """코디 내 아이템 위치"""
    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    ACCESSORY = "accessory"
    OUTERWEAR = "outerwear"
    DRESS = "dress"


class OutfitItemRef(BaseSchema):
    item_id: str = Field(..., description="WardrobeItem ID")
    position: Position = Field(..., description="코디 내 위치")


class WeatherContextSnapshot(BaseSchema):
    """코디 생성 시점의 날씨 (표시용 스냅샷, 재계산하지 않음)"""
    temperature: float = Field(..., description="기온")
    condition: str = Field(..., description="날씨 상태")
    date: str = Field(..., description="날짜 (YYYY-MM-DD)")


class Outfit(BaseSchema):
    id: str = Field(..., description="코디 ID")
    name: str | None = Field(default=None, description="코디 이름")
    occasion: str | None = Field(default=None, description="상황 태그")
    is_ai_generated: bool = Field(default=False, description="AI 생성 여부")
    is_favorite: bool = Field(default=False, description="즐겨찾기 여부")
    weather_context: WeatherContextSnapshot | None = Field(
        default=None, description="생성 시점 날씨"
    )
    items: list[OutfitItemRef] = Field(default_factory=list, description="아이템 목록")
    created_at: datetime = Field(..., description="생성 시각")


class CreateOutfitInput(BaseSchema):
    name: str | None = None
    occasion: str | None = None
    is_ai_generated: bool = False
    weather_context: WeatherContextSnapshot | None = None
    items: list[OutfitItemRef] = Field(default_factory=list)


class UpdateOutfitInput(BaseSchema):
    name: str | None = None
    occasion: str | None = None
    is_favorite: bool | None = None
    items: list[OutfitItemRef] | None = Field(
        default=None, description="전달 시 기존 목록을 통째로 교체"
    )


class OutfitValidationRequest(BaseSchema):
    items: list[OutfitItemRef] = Field(default_factory=list, description="검증할 아이템 목록")


class OutfitValidationResult(BaseSchema):
    valid: bool = Field(..., description="유효 여부")
    errors: list[str] = Field(default_factory=list, description="위반한 규칙 메시지 목록")


class OutfitUpdateRequest(BaseSchema):
    outfit: Outfit = Field(..., description="현재 코디 스냅샷")
    changes: UpdateOutfitInput = Field(..., description="변경 내용")
