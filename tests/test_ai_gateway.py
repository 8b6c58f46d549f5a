"""Tests for the AI gateway client (medassist/services/ai_gateway.py)."""

import httpx
import pytest

from conftest import DIAGNOSIS_ARGS, completion_body, tool_call_response
from medassist.services import ai_gateway
from medassist.services.ai_gateway import (
    AIGatewayClient,
    GatewayError,
    PaymentRequiredError,
    RateLimitedError,
    get_gateway_client,
)
from medassist.services.prompts import DIAGNOSIS_TOOL


async def _call(client: AIGatewayClient) -> dict:
    return await client.call_tool(
        system="system prompt",
        user="user prompt",
        tool=DIAGNOSIS_TOOL,
        empty_message="No valid analysis returned from AI",
    )


class TestAvailability:
    def test_unavailable_without_key(self):
        assert AIGatewayClient(api_key="").available() is False

    def test_available_with_key(self):
        assert AIGatewayClient(api_key="secret").available() is True

    def test_defaults_from_config(self):
        client = AIGatewayClient(api_key="secret")
        assert client.base_url == "https://ai.gateway.lovable.dev/v1"
        assert client.model == "google/gemini-2.5-flash"

    def test_singleton(self, monkeypatch):
        monkeypatch.setattr(ai_gateway, "_client", None)
        assert get_gateway_client() is get_gateway_client()

    async def test_missing_key_raises(self):
        with pytest.raises(GatewayError, match="AI_GATEWAY_API_KEY is not configured") as exc_info:
            await _call(AIGatewayClient(api_key=""))
        assert exc_info.value.status_code == 500


class TestRequestShape:
    async def test_posts_to_chat_completions_with_bearer(self, gateway):
        gateway.queue(tool_call_response("provide_diagnosis", DIAGNOSIS_ARGS))
        await _call(ai_gateway._client)

        request = gateway.requests[0]
        assert request.method == "POST"
        assert request.url == "https://gateway.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"

    async def test_forces_single_tool(self, gateway):
        gateway.queue(tool_call_response("provide_diagnosis", DIAGNOSIS_ARGS))
        await _call(ai_gateway._client)

        body = gateway.sent()
        assert body["model"] == "test-model"
        assert body["messages"] == [
            {"role": "system", "content": "system prompt"},
            {"role": "user", "content": "user prompt"},
        ]
        assert body["tools"] == [DIAGNOSIS_TOOL]
        assert body["tool_choice"] == {"type": "function", "function": {"name": "provide_diagnosis"}}

    async def test_no_retry_on_failure(self, gateway):
        gateway.queue(httpx.Response(503, text="unavailable"))
        with pytest.raises(GatewayError):
            await _call(ai_gateway._client)
        assert len(gateway.requests) == 1


class TestResponses:
    async def test_returns_arguments_unmodified(self, gateway):
        args = dict(DIAGNOSIS_ARGS, extra_field={"nested": [1, 2, 3]})
        gateway.queue(tool_call_response("provide_diagnosis", args))
        assert await _call(ai_gateway._client) == args

    async def test_rate_limited(self, gateway):
        gateway.queue(httpx.Response(429, json={"error": "slow down"}))
        with pytest.raises(RateLimitedError) as exc_info:
            await _call(ai_gateway._client)
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "Rate limit exceeded. Please try again later."

    async def test_payment_required(self, gateway):
        gateway.queue(httpx.Response(402, json={"error": "no credits"}))
        with pytest.raises(PaymentRequiredError) as exc_info:
            await _call(ai_gateway._client)
        assert exc_info.value.status_code == 402
        assert exc_info.value.message == "Payment required. Please add credits to your workspace."

    async def test_other_status_is_generic(self, gateway):
        gateway.queue(httpx.Response(400, json={"error": "bad request"}))
        with pytest.raises(GatewayError) as exc_info:
            await _call(ai_gateway._client)
        assert type(exc_info.value) is GatewayError
        assert exc_info.value.message == "AI gateway error"

    async def test_transport_failure_is_generic(self, gateway):
        gateway.queue(httpx.ConnectError("connection refused"))
        with pytest.raises(GatewayError, match="AI gateway error"):
            await _call(ai_gateway._client)

    async def test_no_tool_call(self, gateway):
        message = {"role": "assistant", "content": "I cannot help with that."}
        gateway.queue(httpx.Response(200, json=completion_body(message)))
        with pytest.raises(GatewayError, match="No valid analysis returned from AI"):
            await _call(ai_gateway._client)

    async def test_empty_choices(self, gateway):
        body = completion_body({"role": "assistant", "content": ""})
        body["choices"] = []
        gateway.queue(httpx.Response(200, json=body))
        with pytest.raises(GatewayError, match="No valid analysis returned from AI"):
            await _call(ai_gateway._client)

    async def test_malformed_arguments(self, gateway):
        gateway.queue(tool_call_response("provide_diagnosis", '{"primary_diagnosis": '))
        with pytest.raises(GatewayError, match="No valid analysis returned from AI"):
            await _call(ai_gateway._client)

    async def test_non_object_arguments_passed_through(self, gateway):
        gateway.queue(tool_call_response("provide_diagnosis", "[1, 2]"))
        assert await _call(ai_gateway._client) == [1, 2]
