from unittest.mock import AsyncMock, MagicMock

import pytest

from outfit_engine.core.exceptions import LLMError, ParseError
from outfit_engine.steal_look.schemas import (
    AISuggestion,
    ForeignItem,
    MatchType,
    StealLookRequest,
)
from outfit_engine.steal_look.service import StealLookService, get_steal_look_service
from outfit_engine.wardrobe.schemas import WardrobeItem


@pytest.fixture
def request_data():
    return StealLookRequest(
        post_id="post-1",
        tagged_items=[
            ForeignItem(id="t1", category="tops", colors=["black"]),
            ForeignItem(id="t2", category="shoes", colors=["white"]),
        ],
        wardrobe=[
            WardrobeItem(id="w1", category="tops", color="black"),
            WardrobeItem(id="w2", category="tops", color="grey"),
            WardrobeItem(id="w3", category="shoes", color="white", status="processing"),
        ],
    )


@pytest.fixture
def mock_classifier():
    classifier = MagicMock()
    classifier.classify = AsyncMock()
    return classifier


class TestAnalyzeWithoutAI:

    @pytest.mark.asyncio
    async def test_attribute_matching(self, request_data):
        # Given
        service = StealLookService()

        # When
        result = await service.analyze(request_data)

        # Then
        assert result.post_id == "post-1"
        assert result.matches[0].matched_item.id == "w1"
        assert result.matches[1].match_type == MatchType.MISSING
        assert result.overall_score == 50
        assert result.can_recreate is False


class TestAnalyzeWithAI:

    @pytest.mark.asyncio
    async def test_suggestions_are_applied(self, request_data, mock_classifier):
        # Given
        mock_classifier.classify.return_value = {
            "t1": AISuggestion(
                target_id="t1",
                matched_item_id="w2",
                match_type=MatchType.SIMILAR,
                confidence=65,
                reason="Grey works as a softer alternative",
            )
        }
        service = StealLookService(classifier=mock_classifier)

        # When
        result = await service.analyze(request_data)

        # Then
        assert result.matches[0].matched_item.id == "w2"
        assert result.matches[0].match_reason == "Grey works as a softer alternative"
        # t2는 제안이 없으므로 속성 기반 매칭
        assert result.matches[1].match_type == MatchType.MISSING

    @pytest.mark.asyncio
    async def test_classifier_gets_only_complete_items(self, request_data, mock_classifier):
        mock_classifier.classify.return_value = {}
        service = StealLookService(classifier=mock_classifier)

        await service.analyze(request_data)

        targets, wardrobe = mock_classifier.classify.call_args.args
        assert [t.id for t in targets] == ["t1", "t2"]
        assert [item.id for item in wardrobe] == ["w1", "w2"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [LLMError("OpenAI API failed"), ParseError("bad json")])
    async def test_falls_back_on_ai_failure(self, request_data, mock_classifier, error):
        # Given
        mock_classifier.classify.side_effect = error
        service = StealLookService(classifier=mock_classifier)

        # When
        result = await service.analyze(request_data)

        # Then
        assert result.matches[0].matched_item.id == "w1"
        assert result.matches[0].match_type == MatchType.EXACT
        assert result.overall_score == 50

    @pytest.mark.asyncio
    async def test_no_tagged_items_skips_classifier(self, mock_classifier):
        service = StealLookService(classifier=mock_classifier)

        result = await service.analyze(StealLookRequest(post_id="p"))

        assert result.overall_score == 0
        mock_classifier.classify.assert_not_called()


class TestServiceFactory:

    def test_without_ai_setting(self):
        service = get_steal_look_service()

        assert service._classifier is None
