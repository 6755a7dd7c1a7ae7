"""Tests for the editor backend API."""

import json

import pytest
from fastapi.testclient import TestClient

from adventure_scribe.api import create_app
from adventure_scribe.commands.registry import COMMANDS
from adventure_scribe.config import Settings
from adventure_scribe.engine.resolver import ContentResolver
from adventure_scribe.engine.substitution import SubstitutionEngine
from adventure_scribe.generation.providers import ProviderAPIError
from adventure_scribe.generation.service import GenerationService
from adventure_scribe.testing import FakeGenerationService, FakeProvider


@pytest.fixture
def settings(mock_env_empty):
    """Settings with no providers and default limits."""
    return Settings(_env_file=None)


@pytest.fixture
def provider(monster_data):
    """Fake provider replying with the monster fixture."""
    return FakeProvider(replies=[json.dumps(monster_data)])


@pytest.fixture
def client(provider, settings):
    """Test client around a service with one fake provider."""
    app = create_app(service=GenerationService({"fake": provider}), settings=settings)
    return TestClient(app)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert "timestamp" in body
        assert body["uptime"] >= 0


class TestProviders:
    """Tests for GET /api/ai/providers."""

    def test_lists_providers(self, client):
        response = client.get("/api/ai/providers")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"providers": ["fake"], "default": "fake"}}

    def test_no_providers(self, settings):
        client = TestClient(create_app(service=GenerationService({}), settings=settings))

        body = client.get("/api/ai/providers").json()

        assert body["data"] == {"providers": [], "default": None}


class TestGenerate:
    """Tests for the generation endpoints."""

    def test_generate(self, client):
        response = client.post("/api/ai/generate", json={"contentType": "monster", "prompt": "a frost wyrmling"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Frost Wyrmling"
        assert body["provider"] == "fake"

    def test_generate_kind_in_path(self, client, provider):
        """Encounter requests carry the party through to the prompt."""
        response = client.post(
            "/api/ai/generate/encounter",
            json={"prompt": "wolves", "partyLevel": 2, "partySize": 3},
        )

        assert response.status_code == 200
        assert provider.completions[0].user == "wolves (Party: 3 level 2 characters)"

    @pytest.mark.parametrize(
        ("path", "body", "message"),
        [
            ("/api/ai/generate", {"prompt": "goblin"}, "Content type is required"),
            ("/api/ai/generate", {"contentType": "monster"}, "Prompt is required"),
            ("/api/ai/generate/monster", {"prompt": "   "}, "Prompt is required"),
            ("/api/ai/generate/dragon", {"prompt": "red"}, "Unsupported content type: dragon"),
            ("/api/ai/generate/encounter", {"prompt": "x", "partyLevel": 21}, "Party level must be between 1 and 20"),
            ("/api/ai/generate/encounter", {"prompt": "x", "partySize": 9}, "Party size must be between 1 and 8"),
        ],
    )
    def test_bad_requests(self, client, path, body, message):
        response = client.post(path, json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": message}

    def test_provider_failure(self, settings):
        service = GenerationService({"fake": FakeProvider(error=ProviderAPIError("Rate limit exceeded"))})
        client = TestClient(create_app(service=service, settings=settings))

        response = client.post("/api/ai/generate/monster", json={"prompt": "goblin"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Rate limit exceeded", "provider": "fake"}

    def test_unknown_provider(self, client):
        response = client.post("/api/ai/generate/monster", json={"prompt": "goblin", "provider": "gemini"})

        assert response.status_code == 500
        assert "'gemini' not available" in response.json()["error"]


class TestEditor:
    """Tests for the editor endpoints."""

    def test_commands(self, client):
        response = client.get("/api/editor/commands")

        assert response.status_code == 200
        commands = response.json()["commands"]
        assert len(commands) == len(COMMANDS)
        ai_monster = next(c for c in commands if c["name"] == "ai-monster")
        assert ai_monster["strategy"] == "generate"
        assert ai_monster["usage"].startswith("/ai-monster [prompt]")

    def test_expand(self, client):
        response = client.post("/api/editor/expand", json={"text": "Ambush!\n/add-monster Goblin"})

        assert response.status_code == 200
        body = response.json()
        assert body["newText"].startswith("Ambush!\n<div")
        assert body["appliedCount"] == 1
        assert body["directiveCount"] == 1
        assert body["failures"] == []

    def test_expand_reports_failures(self, client):
        response = client.post("/api/editor/expand", json={"text": "/unknown-command foo"})

        body = response.json()
        assert body["newText"] == "/unknown-command foo"
        assert body["failures"] == [
            {"name": "unknown-command", "argument": "foo", "reason": "UnknownCommand", "detail": "Unknown command: /unknown-command"}
        ]

    def test_expand_generated(self, client):
        """AI commands go through the app's generation service."""
        body = client.post("/api/editor/expand", json={"text": "/ai-monster wyrm"}).json()

        assert body["appliedCount"] == 1
        assert "Frost Wyrmling" in body["newText"]

    def test_expand_timeout(self, settings, monster_data):
        """The request timeout overrides the configured one."""
        generator = FakeGenerationService(responses={"monster": monster_data}, delay=1.0)
        engine = SubstitutionEngine(ContentResolver(generator=generator))
        client = TestClient(create_app(service=GenerationService({}), engine=engine, settings=settings))

        body = client.post("/api/editor/expand", json={"text": "/ai-monster slow", "resolveTimeoutMs": 10}).json()

        assert body["failures"][0]["reason"] == "Timeout"

    def test_expand_rejects_bad_timeout(self, client):
        response = client.post("/api/editor/expand", json={"text": "x", "resolveTimeoutMs": 0})

        assert response.status_code == 422
