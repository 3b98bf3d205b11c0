import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

from pydantic import ValidationError

from outfit_engine.core.exceptions import LLMError, ParseError
from outfit_engine.core.llm_client import LLMClient, extract_json, extract_message_content
from outfit_engine.steal_look.schemas import AISuggestion, ForeignItem
from outfit_engine.wardrobe.schemas import WardrobeItem

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a fashion matching assistant. Given TARGET items from a friend's outfit, find the BEST match for each from the user's wardrobe.

For EACH target item, find the best match. Rules:
- "exact": same category AND very similar color/style (confidence 85-100)
- "similar": same category but different color/style (confidence 40-80)
- "missing": no items in that category at all (confidence 0)
- If multiple items match, pick the BEST one

Return ONLY valid JSON:
{
  "matches": [
    {
      "targetId": "target-item-id",
      "matchedItemId": "user-item-id or null if missing",
      "matchType": "exact | similar | missing",
      "confidence": 0-100,
      "reason": "human-readable explanation"
    }
  ]
}"""


class LookClassifier(Protocol):
    """태그 아이템별 매칭 제안을 만드는 전략 (AI 또는 테스트용 대체 구현)"""

    async def classify(
        self: "LookClassifier",
        targets: Sequence[ForeignItem],
        wardrobe: Sequence[WardrobeItem],
    ) -> dict[str, AISuggestion]:
        ...


class LLMLookClassifier:
    """LLM 한 번 호출로 모든 타깃 아이템의 매칭 제안을 받는다"""

    def __init__(self: "LLMLookClassifier", llm_client: LLMClient) -> None:
        self.llm_client = llm_client

    async def classify(
        self: "LLMLookClassifier",
        targets: Sequence[ForeignItem],
        wardrobe: Sequence[WardrobeItem],
    ) -> dict[str, AISuggestion]:
        if not targets:
            return {}

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self._build_prompt(targets, wardrobe)},
        ]

        logger.info(f"Requesting AI look matching for {len(targets)} targets")

        try:
            # temperature, max_tokens, JSON 모드는 Settings(LLM_*) 값을 사용
            response = await self.llm_client.chat_completion(messages=messages)
            return self._parse_response(response)

        except LLMError:
            raise

        except (KeyError, IndexError, TypeError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse LLM response: {e}")
            raise ParseError(f"Invalid look matching response format: {e}") from e

    @staticmethod
    def _build_prompt(
        targets: Sequence[ForeignItem],
        wardrobe: Sequence[WardrobeItem],
    ) -> str:
        # 토큰 절약을 위해 매칭에 필요한 속성만 전달
        targets_summary = [
            {"id": t.id, "name": t.name, "category": t.category, "colors": t.colors}
            for t in targets
        ]
        wardrobe_summary = [
            {
                "id": item.id,
                "name": item.name,
                "category": item.category.value,
                "sub_category": item.sub_category,
                "colors": item.colors,
                "brand": item.brand,
            }
            for item in wardrobe
        ]

        lines = [
            "TARGET ITEMS (friend's outfit):",
            json.dumps(targets_summary, indent=2, ensure_ascii=False),
            "",
            "USER'S WARDROBE:",
            json.dumps(wardrobe_summary, indent=2, ensure_ascii=False),
        ]
        return "\n".join(lines)

    @staticmethod
    def _parse_response(response: dict[str, Any]) -> dict[str, AISuggestion]:
        data = extract_json(extract_message_content(response))

        suggestions: dict[str, AISuggestion] = {}
        for raw in data["matches"]:
            suggestion = AISuggestion.model_validate(raw)
            suggestions[suggestion.target_id] = suggestion
        return suggestions
