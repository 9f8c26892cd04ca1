import pytest

from eulens.core.config import Settings, get_settings
from eulens.core.exceptions import ConfigurationMissing


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("OPENAI_API_KEY", "QDRANT_URL", "QDRANT_COLLECTION_NAME", "TOP_K", "RELEVANCE_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_missing_api_key_is_reported(monkeypatch):
    with pytest.raises(ConfigurationMissing, match="OPENAI_API_KEY"):
        get_settings()


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("QDRANT_COLLECTION_NAME", "eu-law")
    monkeypatch.setenv("TOP_K", "5")

    settings = get_settings()

    assert settings.openai_api_key == "sk-test"
    assert settings.qdrant_collection_name == "eu-law"
    assert settings.top_k == 5
    assert get_settings() is settings


def test_settings_read_from_env_local_file(tmp_path):
    (tmp_path / ".env.local").write_text("OPENAI_API_KEY=sk-from-file\n", encoding="utf-8")

    assert get_settings().openai_api_key == "sk-from-file"


def test_defaults():
    settings = Settings(_env_file=None, openai_api_key="sk-test")

    assert settings.top_k == 3
    assert settings.relevance_threshold == 0.7
    assert settings.chunk_size == 1000
    assert settings.embedding_model == "text-embedding-ada-002"
    assert settings.registry_path == "data/document-registry.json"
