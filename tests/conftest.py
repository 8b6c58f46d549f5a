import json
import os

import httpx
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# In-memory DB and no gateway credential for tests
os.environ["AI_GATEWAY_API_KEY"] = ""
os.environ["DATABASE_PATH"] = ":memory:"
os.environ["DATABASE_URL"] = ""

from medassist.database import close_db, init_db
from medassist.main import app
from medassist.services import ai_gateway

DOCTOR_ID = "doctor-1"

DIAGNOSIS_ARGS = {
    "primary_diagnosis": "Community-acquired pneumonia",
    "confidence": "high",
    "reasoning": "Fever, productive cough and pleuritic chest pain for five days.",
    "differential_diagnoses": ["Acute bronchitis", "Pulmonary embolism"],
    "red_flags": ["SpO2 below 92%"],
    "recommended_tests": ["Chest X-ray", "CBC"],
}

TREATMENT_ARGS = {
    "treatment_plan": "Outpatient oral antibiotics with review in 48 hours.",
    "medications": ["Amoxicillin 1g PO TID for 5 days"],
    "priority": "urgent",
    "precautions": "Return if breathing worsens.",
    "follow_up": "Clinic review in 48 hours.",
    "lifestyle_recommendations": ["Rest", "Hydration"],
}

SUMMARY_ARGS = {
    "summary": "58-year-old with type 2 diabetes, admitted for cellulitis, discharged on oral antibiotics.",
    "key_findings": ["HbA1c 8.1%", "Left lower leg erythema"],
    "diagnoses": ["Cellulitis", "Type 2 diabetes"],
    "medications": ["Metformin 1g BID"],
    "allergies": ["Penicillin"],
    "urgent_flags": [],
}


def completion_body(message: dict) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1760000000,
        "model": "test-model",
        "choices": [{"index": 0, "finish_reason": "tool_calls", "message": message}],
    }


def tool_call_response(name: str, arguments: dict | str) -> httpx.Response:
    """A chat completion whose only tool call carries ``arguments``."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    message = {
        "role": "assistant",
        "content": None,
        "tool_calls": [
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": name, "arguments": arguments},
            }
        ],
    }
    return httpx.Response(200, json=completion_body(message))


class FakeGateway:
    """Stands in for the upstream gateway, replaying queued responses in order."""

    def __init__(self) -> None:
        self.responses: list[httpx.Response | Exception] = []
        self.requests: list[httpx.Request] = []

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self.responses.extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(500, json={"error": "nothing queued"})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def sent(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest_asyncio.fixture
async def db():
    """Provide a fresh in-memory database for each test."""
    import medassist.database as db_mod

    if db_mod._db is not None:
        await db_mod._db.close()
    db_mod._db = None

    db_mod.DATABASE_PATH = ":memory:"
    db_mod.DATABASE_URL = ""

    await init_db()
    database = await db_mod.get_db()
    yield database
    await close_db()


@pytest_asyncio.fixture
async def gateway(monkeypatch):
    """Route the gateway client to a FakeGateway."""
    fake = FakeGateway()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    client = ai_gateway.AIGatewayClient(
        api_key="test-key",
        base_url="https://gateway.test/v1",
        model="test-model",
        http_client=http_client,
    )
    monkeypatch.setattr(ai_gateway, "_client", client)
    yield fake
    await http_client.aclose()


@pytest_asyncio.fixture
async def async_client(db):
    """Provide an async httpx client acting as the signed-in doctor."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Doctor-Id": DOCTOR_ID},
    ) as ac:
        yield ac
