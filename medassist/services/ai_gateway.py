"""Client for the hosted AI gateway (OpenAI-compatible chat completions).

Every clinical operation is one request to the same endpoint with one
forced function-call tool. The tool-call arguments come back verbatim.
Only two upstream failures are told apart (429 and 402); anything else
is reported as a generic gateway error. There is no retry.
"""

import json
import logging

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI, RateLimitError

from medassist.config import (
    AI_GATEWAY_API_KEY,
    AI_GATEWAY_BASE_URL,
    AI_GATEWAY_MODEL,
    AI_GATEWAY_TIMEOUT,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
PAYMENT_REQUIRED_MESSAGE = "Payment required. Please add credits to your workspace."
GATEWAY_ERROR_MESSAGE = "AI gateway error"


class GatewayError(Exception):
    """Failure talking to the AI gateway, rendered as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RateLimitedError(GatewayError):
    status_code = 429

    def __init__(self, message: str = RATE_LIMIT_MESSAGE) -> None:
        super().__init__(message)


class PaymentRequiredError(GatewayError):
    status_code = 402

    def __init__(self, message: str = PAYMENT_REQUIRED_MESSAGE) -> None:
        super().__init__(message)


def _tool_arguments(response: object, empty_message: str) -> object:
    choices = getattr(response, "choices", None) or []
    message = getattr(choices[0], "message", None) if choices else None
    tool_calls = getattr(message, "tool_calls", None) or []
    function = getattr(tool_calls[0], "function", None) if tool_calls else None
    if function is None:
        raise GatewayError(empty_message)

    try:
        arguments = json.loads(function.arguments)
    except (TypeError, json.JSONDecodeError):
        logger.error("Tool call arguments are not valid JSON: %r", function.arguments)
        raise GatewayError(empty_message) from None

    return arguments


class AIGatewayClient:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = AI_GATEWAY_API_KEY if api_key is None else api_key
        self.base_url = base_url or AI_GATEWAY_BASE_URL
        self.model = model or AI_GATEWAY_MODEL
        self._openai = (
            AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=timeout or AI_GATEWAY_TIMEOUT,
                max_retries=0,
                http_client=http_client,
            )
            if self.api_key
            else None
        )

    def available(self) -> bool:
        return self._openai is not None

    async def call_tool(
        self,
        *,
        system: str,
        user: str,
        tool: dict,
        empty_message: str,
    ) -> object:
        """Send one prompt pair with ``tool`` forced and return its arguments."""
        if not self.available():
            raise GatewayError("AI_GATEWAY_API_KEY is not configured")

        name = tool["function"]["name"]
        try:
            response = await self._openai.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                tools=[tool],
                tool_choice={"type": "function", "function": {"name": name}},
            )
        except RateLimitError:
            raise RateLimitedError() from None
        except APIStatusError as e:
            if e.status_code == 402:
                raise PaymentRequiredError() from None
            logger.error("AI gateway error: %s %s", e.status_code, e.response.text)
            raise GatewayError(GATEWAY_ERROR_MESSAGE) from e
        except APIError as e:
            logger.error("AI gateway request failed: %s", e)
            raise GatewayError(GATEWAY_ERROR_MESSAGE) from e

        logger.info("AI response received")
        return _tool_arguments(response, empty_message)


_client: AIGatewayClient | None = None


def get_gateway_client() -> AIGatewayClient:
    global _client
    if _client is None:
        _client = AIGatewayClient()
    return _client
