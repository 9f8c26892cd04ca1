from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from eulens.chat_service import app
from eulens.core.dependencies import get_services
from eulens.core.exceptions import ConfigurationMissing
from eulens.models.document import VectorMatch
from eulens.services.query_processor import QueryProcessor

from conftest import FakeEmbeddingService, FakeLLMService, FakeVectorDB

GDPR_URL = "http://data.europa.eu/eli/reg/2016/679"


def _container(settings, llm):
    vector_db = FakeVectorDB(
        matches=[
            VectorMatch(
                id="GDPR-0",
                score=0.85,
                metadata={"text": "GDPR governs personal data.", "document": "GDPR", "source": GDPR_URL},
            ),
            VectorMatch(id="Other-0", score=0.4, metadata={"text": "Unrelated.", "document": "Other"}),
        ]
    )
    return SimpleNamespace(
        settings=settings,
        vector_db=vector_db,
        query_processor=QueryProcessor(vector_db, FakeEmbeddingService(), llm),
    )


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_chat_returns_answer_and_sources(client, settings):
    llm = FakeLLMService(response="GDPR is the EU data protection regulation.")
    app.dependency_overrides[get_services] = lambda: _container(settings, llm)

    response = client.post("/api/chat", json={"message": "What is GDPR?"})

    assert response.status_code == 200
    assert response.json() == {
        "response": "GDPR is the EU data protection regulation.",
        "sources": [{"name": "GDPR", "url": GDPR_URL, "relevance": 0.85}],
    }


def test_pipeline_failure_returns_generic_error(client, settings):
    app.dependency_overrides[get_services] = lambda: _container(settings, FakeLLMService(fail=True))

    response = client.post("/api/chat", json={"message": "What is GDPR?"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_missing_configuration_fails_at_request_time(client):
    async def unconfigured():
        raise ConfigurationMissing("Missing or invalid configuration: OPENAI_API_KEY")

    app.dependency_overrides[get_services] = unconfigured

    response = client.post("/api/chat", json={"message": "What is GDPR?"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_message_is_required(client, settings):
    app.dependency_overrides[get_services] = lambda: _container(settings, FakeLLMService())

    response = client.post("/api/chat", json={})

    assert response.status_code == 422


def test_metrics_endpoint_exposes_chat_counters(client):
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "eulens_chat_requests_total" in response.text
