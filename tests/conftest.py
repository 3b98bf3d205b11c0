from __future__ import annotations

import os
from collections.abc import Generator
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from outfit_engine.main import app
from outfit_engine.wardrobe.schemas import WardrobeItem


# ============================================================
# 환경변수 설정 (가장 먼저 실행)
# ============================================================
@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """
    테스트 환경변수 설정
    - CI: GitHub Actions의 env 사용
    - 로컬: 테스트용 기본값 사용 (AI 매칭 비활성화)
    """
    test_env = {
        "APP_ENV": os.getenv("APP_ENV", "ci"),
        "DEBUG": os.getenv("DEBUG", "False"),
        "USE_AI_MATCHING": "False",
    }
    os.environ.update(test_env)

    # Settings / 서비스 캐시 클리어 (중요!)
    from outfit_engine.config import get_settings
    from outfit_engine.steal_look.service import get_steal_look_service

    get_settings.cache_clear()
    get_steal_look_service.cache_clear()

    yield

    get_settings.cache_clear()
    get_steal_look_service.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def mock_steal_look_service() -> Generator[AsyncMock, None, None]:
    from outfit_engine.steal_look.service import StealLookService, get_steal_look_service

    mock_service: AsyncMock = AsyncMock(spec=StealLookService)
    app.dependency_overrides[get_steal_look_service] = lambda: mock_service
    yield mock_service
    app.dependency_overrides.clear()


# ============================================================
# 옷장 샘플 데이터
# ============================================================


@pytest.fixture
def sample_wardrobe() -> list[WardrobeItem]:
    return [
        WardrobeItem(
            id="w1",
            name="Navy Blazer",
            category="tops",
            sub_category="blazer",
            color="navy",
            style="classic",
            seasons=["autumn", "winter"],
            occasions=["business"],
            formality=7,
            image_url="https://example.com/w1.jpg",
            created_at=datetime(2025, 1, 10, tzinfo=timezone.utc),
        ),
        WardrobeItem(
            id="w2",
            name="Black Jeans",
            category="bottoms",
            sub_category="jeans",
            color="black",
            style="casual",
            seasons=["spring", "autumn", "winter"],
            occasions=["casual", "everyday"],
            formality=3,
            image_url="https://example.com/w2.jpg",
            created_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
        ),
        WardrobeItem(
            id="w3",
            name="Grey Blazer",
            category="tops",
            sub_category="blazer",
            color="grey",
            seasons=["autumn"],
            image_url="https://example.com/w3.jpg",
            processed_image_url="https://example.com/w3_nobg.png",
            created_at=datetime(2025, 3, 5, tzinfo=timezone.utc),
        ),
        WardrobeItem(
            id="w4",
            name="White Sneakers",
            category="shoes",
            color="white",
            style="streetwear",
            seasons=["spring", "summer"],
            formality=2,
            image_url="https://example.com/w4.jpg",
            created_at=datetime(2025, 3, 20, tzinfo=timezone.utc),
        ),
        WardrobeItem(
            id="w5",
            name="Red Skirt",
            category="bottoms",
            color="red",
            status="pending",
            image_url="https://example.com/w5.jpg",
        ),
    ]
