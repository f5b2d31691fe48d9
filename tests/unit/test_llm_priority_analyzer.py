import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from models.schemas import LLMAnalysisResult
from services.llm_priority_analyzer import LLMPriorityAnalyzer, parse_analysis_content

ANALYSIS_PAYLOAD = {
    "mappings": {"Lower taxes": ["fiscal policy", "tax reform"]},
    "analysis": "Voters focused on fiscal restraint.",
    "conflicts": [{"priority1": "Lower taxes", "priority2": "More schools", "reason": "Funding"}],
    "confidenceScores": {"Lower taxes": 0.92},
}


def _client_returning(content) -> MagicMock:
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


class TestParseAnalysisContent:
    def test_parses_json_string(self):
        result = parse_analysis_content(json.dumps(ANALYSIS_PAYLOAD))

        assert isinstance(result, LLMAnalysisResult)
        assert result.mappings["Lower taxes"] == ["fiscal policy", "tax reform"]
        assert result.confidence_scores == {"Lower taxes": 0.92}
        assert result.conflicts[0].priority2 == "More schools"

    def test_parses_fenced_json(self):
        content = "```json\n" + json.dumps(ANALYSIS_PAYLOAD) + "\n```"

        result = parse_analysis_content(content)

        assert result.analysis == "Voters focused on fiscal restraint."

    def test_accepts_decoded_object(self):
        assert parse_analysis_content(ANALYSIS_PAYLOAD).mappings

    def test_missing_fields_default_to_empty(self):
        result = parse_analysis_content("{}")

        assert result.mappings == {}
        assert result.conflicts == []

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", None, '{"mappings": "oops"}'])
    def test_rejects_unparseable_content(self, content):
        with pytest.raises(ValueError):
            parse_analysis_content(content)


class TestLLMPriorityAnalyzer:
    @pytest.mark.asyncio
    async def test_analyze_sends_prompts_and_parses_result(self):
        client = _client_returning(json.dumps(ANALYSIS_PAYLOAD))
        analyzer = LLMPriorityAnalyzer(client=client, model="gpt-test")

        result = await analyzer.analyze(["Lower taxes", "More schools"])

        assert result.mappings["Lower taxes"]
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["temperature"] == analyzer.temperature
        assert kwargs["max_tokens"] == analyzer.max_tokens
        system, user = kwargs["messages"]
        assert system["role"] == "system"
        assert "political analyst" in system["content"]
        assert user["content"] == 'Analyze these voter priorities: ["Lower taxes", "More schools"]'

    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self, monkeypatch):
        from services import llm_priority_analyzer

        monkeypatch.setattr(llm_priority_analyzer.settings, "openai_api_key", None)
        analyzer = LLMPriorityAnalyzer()

        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            await analyzer.analyze(["Lower taxes"])

    @pytest.mark.asyncio
    async def test_unparseable_response_raises(self):
        analyzer = LLMPriorityAnalyzer(client=_client_returning("I cannot help with that"))

        with pytest.raises(ValueError):
            await analyzer.analyze(["Lower taxes"])

    @pytest.mark.asyncio
    async def test_empty_choices_raise(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(choices=[]))
        analyzer = LLMPriorityAnalyzer(client=client)

        with pytest.raises(ValueError):
            await analyzer.analyze(["Lower taxes"])

    @pytest.mark.asyncio
    async def test_api_errors_propagate(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("rate limited"))
        analyzer = LLMPriorityAnalyzer(client=client)

        with pytest.raises(RuntimeError, match="rate limited"):
            await analyzer.analyze(["Lower taxes"])
