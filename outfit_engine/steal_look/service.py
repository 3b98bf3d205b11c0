import logging
from functools import lru_cache

from outfit_engine.config import get_settings
from outfit_engine.core.exceptions import LLMError, ParseError
from outfit_engine.steal_look.classifier import LookClassifier
from outfit_engine.steal_look.matcher import match_look
from outfit_engine.steal_look.schemas import AISuggestion, StealLookRequest, StealLookResult
from outfit_engine.wardrobe.schemas import WardrobeItem, complete_items

logger = logging.getLogger(__name__)


class StealLookService:
    def __init__(self: "StealLookService", classifier: LookClassifier | None = None) -> None:
        self._classifier = classifier

    async def analyze(self: "StealLookService", request: StealLookRequest) -> StealLookResult:
        logger.info(
            f"Analyzing look for post: {request.post_id} "
            f"({len(request.tagged_items)} tagged items)"
        )

        wardrobe = complete_items(request.wardrobe)
        suggestions = await self._suggest(request, wardrobe)

        return match_look(
            request.tagged_items,
            wardrobe,
            suggestions=suggestions,
            post_id=request.post_id,
        )

    async def _suggest(
        self: "StealLookService",
        request: StealLookRequest,
        wardrobe: list[WardrobeItem],
    ) -> dict[str, AISuggestion]:
        if self._classifier is None or not request.tagged_items:
            return {}

        try:
            return await self._classifier.classify(request.tagged_items, wardrobe)
        except (LLMError, ParseError) as e:
            logger.warning(f"AI matching failed, using fallback: {e}")
            return {}


@lru_cache
def get_steal_look_service() -> StealLookService:
    settings = get_settings()
    if not settings.ai_matching_enabled:
        return StealLookService()

    from outfit_engine.core.llm_client import OpenAIClient
    from outfit_engine.steal_look.classifier import LLMLookClassifier

    return StealLookService(classifier=LLMLookClassifier(OpenAIClient(settings)))
