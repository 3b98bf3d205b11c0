"""
OpenAI chat completion 클라이언트

Steal-the-Look AI 매칭 전용이라 모델, 토큰 예산, JSON 모드, 재시도 횟수는
모두 Settings에서 가져옵니다. 응답 본문 파싱은 호출 측(분류기)의 책임입니다.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from outfit_engine.config import Settings, get_settings
from outfit_engine.core.exceptions import LLMError

logger = logging.getLogger(__name__)

OPENAI_BASE_URL = "https://api.openai.com/v1"
RETRYABLE_STATUS = frozenset([429, 500, 502, 503, 504])

_backoff = wait_exponential(multiplier=1, min=2, max=30)


def _should_retry(exception: BaseException) -> bool:
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code in RETRYABLE_STATUS
    return isinstance(exception, httpx.TimeoutException | httpx.ConnectError)


def _retry_wait(retry_state: RetryCallState) -> float:
    """Retry-After 헤더가 있으면 그 값을, 없으면 지수 백오프"""
    exception = retry_state.outcome.exception()
    if isinstance(exception, httpx.HTTPStatusError):
        header = exception.response.headers.get("Retry-After")
        try:
            return float(header) if header else _backoff(retry_state)
        except ValueError:
            return _backoff(retry_state)
    return _backoff(retry_state)


def _to_llm_error(exception: Exception) -> LLMError:
    if isinstance(exception, httpx.HTTPStatusError):
        status = exception.response.status_code
        body = exception.response.text
        logger.error("OpenAI API Error [%s]: %s", status, body)
        if status == 401:
            return LLMError("Invalid OpenAI API Key")
        if status == 400:
            return LLMError(f"Invalid request: {body}")
        return LLMError(f"OpenAI API failed after retries: {body}")

    if isinstance(exception, httpx.TimeoutException | httpx.ConnectError):
        logger.error("OpenAI network error after retries: %s", exception)
        return LLMError(f"Network error: {exception}")

    logger.error("Unexpected error during OpenAI call: %r", exception)
    return LLMError(f"Unexpected error: {exception}")


def extract_message_content(response: dict[str, Any]) -> str:
    """chat completion 응답에서 첫 번째 메시지 본문 추출"""
    return response["choices"][0]["message"]["content"]


def extract_json(content: str) -> dict[str, Any]:
    """문자열에서 JSON 추출 (마크다운 코드블록, 앞뒤 설명 문구 처리)"""
    content = content.strip()

    if content.startswith("```"):
        lines = [line for line in content.split("\n") if not line.startswith("```")]
        content = "\n".join(lines)

    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end < start:
        raise json.JSONDecodeError("No JSON object found", content, 0)

    return json.loads(content[start : end + 1])


class LLMClient(ABC):
    @abstractmethod
    async def chat_completion(
        self: "LLMClient",
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict[str, Any]:
        """None인 파라미터는 구현체 설정값을 사용"""


class OpenAIClient(LLMClient):
    def __init__(self: "OpenAIClient", settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _headers(self: "OpenAIClient") -> dict[str, str]:
        if not self.settings.openai_api_key:
            raise LLMError("OPENAI_API_KEY is not configured")
        return {
            "Authorization": f"Bearer {self.settings.openai_api_key}",
            "Content-Type": "application/json",
        }

    def _payload(
        self: "OpenAIClient",
        messages: list[dict[str, Any]],
        temperature: float | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.settings.openai_chat_model,
            "messages": messages,
            "temperature": self.settings.llm_temperature if temperature is None else temperature,
            "max_tokens": max_tokens or self.settings.llm_max_tokens,
        }
        if self.settings.llm_json_mode:
            payload["response_format"] = {"type": "json_object"}
        return payload

    async def _post(self: "OpenAIClient", headers: dict[str, str], payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.settings.llm_timeout) as client:
            response = await client.post(
                f"{OPENAI_BASE_URL}/chat/completions", headers=headers, json=payload
            )
            response.raise_for_status()
            return response.json()

    async def chat_completion(
        self: "OpenAIClient",
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict[str, Any]:
        headers = self._headers()
        payload = self._payload(messages, temperature, max_tokens)

        # 429 / 5xx / 네트워크 오류만 LLM_MAX_RETRIES 횟수까지 재시도
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.llm_max_retries),
            wait=_retry_wait,
            retry=retry_if_exception(_should_retry),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self._post(headers, payload)
        except Exception as e:
            raise _to_llm_error(e) from e
