# backend/wellness/tests/test_analysis_client.py
from types import SimpleNamespace

import httpx
import openai
import pytest

from wellness.core.errors import AnalysisConfigError, AnalysisUnavailable
from wellness.services.analysis_client import AnalysisClient, build_prompt


class _Completions:
    def __init__(self, content=None, exc=None):
        self.content = content
        self.exc = exc
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.exc:
            raise self.exc
        msg = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=msg)])


def _client_with(completions: _Completions) -> AnalysisClient:
    client = AnalysisClient(api_key="test-key", model="test-model")
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


def test_missing_key_is_config_error():
    with pytest.raises(AnalysisConfigError):
        AnalysisClient(api_key="").complete({"mood": "good"})


def test_returns_raw_text_and_sends_prompt():
    completions = _Completions(content='  {"analysis": "ok"}  ')
    out = _client_with(completions).complete({"stress": "very_stressed"}, "high", "long text here")
    assert out == '{"analysis": "ok"}'
    assert completions.kwargs["model"] == "test-model"
    user_msg = completions.kwargs["messages"][1]["content"]
    assert "very_stressed" in user_msg
    assert "Calculated Risk Level: high" in user_msg


def test_transport_errors_become_unavailable():
    exc = openai.APIConnectionError(request=httpx.Request("POST", "https://api.groq.com/openai/v1"))
    with pytest.raises(AnalysisUnavailable):
        _client_with(_Completions(exc=exc)).complete({})


def test_prompt_lists_conditions():
    prompt = build_prompt({}, None, "")
    assert "generalized_anxiety" in prompt
    assert "Calculated Risk Level: unknown" in prompt
