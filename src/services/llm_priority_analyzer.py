import json
import logging
import time
from typing import List, Optional

from openai import AsyncOpenAI
from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.schemas import LLMAnalysisResult
from prompts import load_prompt

logger = logging.getLogger(__name__)


def _strip_code_fence(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_analysis_content(content) -> LLMAnalysisResult:
    """Parse the model's message content into an LLMAnalysisResult.

    Content may already be a decoded JSON object or a JSON string, optionally
    wrapped in a markdown code fence.
    """
    if isinstance(content, dict):
        payload = content
    elif isinstance(content, str):
        try:
            payload = json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM analysis content: {content[:200]!r}")
            raise ValueError("Failed to parse LLM analysis content") from e
    else:
        raise ValueError("Invalid or unexpected response structure from LLM")

    if not isinstance(payload, dict):
        raise ValueError("LLM analysis content is not a JSON object")

    try:
        return LLMAnalysisResult.model_validate(payload)
    except PydanticValidationError as e:
        raise ValueError(f"LLM analysis content has unexpected shape: {e}") from e


class LLMPriorityAnalyzer:
    """Maps priorities to political terminology with an OpenAI-compatible chat model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self._api_key = api_key
        self.api_base = api_base or settings.openai_api_base
        self.model = model or settings.openai_model
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self._client = client

    def _get_api_key(self) -> str:
        api_key = self._api_key or settings.openai_api_key
        if not api_key:
            raise ValueError("OPENAI_API_KEY is required for LLM analysis")
        return api_key

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._get_api_key(), base_url=self.api_base)
        return self._client

    def _build_messages(self, priorities: List[str]) -> list[dict]:
        return [
            {"role": "system", "content": load_prompt("priority_analysis/system_prompt")},
            {
                "role": "user",
                "content": load_prompt(
                    "priority_analysis/user_prompt",
                    priorities_json=json.dumps(priorities, ensure_ascii=False),
                ),
            },
        ]

    async def analyze(self, priorities: List[str]) -> LLMAnalysisResult:
        client = self._get_client()

        start_time = time.time()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=self._build_messages(priorities),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error(f"OpenAI API error during priority analysis: {e}")
            raise

        latency = time.time() - start_time
        if not response.choices:
            raise ValueError("Invalid or unexpected response structure from LLM")

        content = response.choices[0].message.content
        result = parse_analysis_content(content)
        logger.info(
            f"LLM priority analysis mapped {len(result.mappings)} priorities "
            f"with {len(result.conflicts)} conflicts in {latency:.2f}s"
        )
        return result
