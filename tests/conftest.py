"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import patch

import pytest

from adventure_scribe.config import get_settings
from adventure_scribe.engine.resolver import ContentResolver
from adventure_scribe.testing import FakeGenerationService


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Clear settings cache before each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_env_empty():
    """Fixture that clears all environment variables."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def mock_env_full():
    """Fixture that provides complete environment configuration."""
    env = {
        "ANTHROPIC_API_KEY": "sk-ant-test-key",
        "OPENAI_API_KEY": "sk-openai-test-key",
        "DEFAULT_PROVIDER": "openai",
        "RESOLVE_TIMEOUT_MS": "5000",
        "MAX_CONCURRENT_RESOLUTIONS": "2",
        "PORT": "8080",
        "FRONTEND_URL": "http://localhost:5173/",
        "LOG_LEVEL": "debug",
    }
    with patch.dict(os.environ, env, clear=True):
        yield env


@pytest.fixture
def monster_data():
    """Valid monster JSON as a provider would return it."""
    return {
        "name": "Frost Wyrmling",
        "size": "Medium",
        "type": "dragon",
        "alignment": "chaotic evil",
        "armorClass": 17,
        "hitPoints": 32,
        "speed": "30 ft., fly 60 ft.",
        "abilities": {
            "strength": 14,
            "dexterity": 10,
            "constitution": 14,
            "intelligence": 5,
            "wisdom": 10,
            "charisma": 11,
        },
        "senses": "blindsight 10 ft., darkvision 60 ft.",
        "languages": "Draconic",
        "challengeRating": "2",
        "actions": [
            {
                "name": "Bite",
                "description": "Melee Weapon Attack: +4 to hit, reach 5 ft., one target.",
                "attackBonus": 4,
                "damage": "1d10 + 2",
                "damageType": "piercing",
            }
        ],
    }


@pytest.fixture
def fake_generator(monster_data):
    """Fake generation collaborator answering monster requests."""
    return FakeGenerationService(responses={"monster": monster_data})


@pytest.fixture
def resolver(fake_generator):
    """Resolver whose random picks always take the first entry."""
    return ContentResolver(generator=fake_generator, rand_func=lambda low, high: low)
