from __future__ import annotations

import pytest

from pyworldwise.config import WorldwiseConfig
from pyworldwise.exceptions import WorldwiseConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("WORLDWISE_SUPABASE_URL", "WORLDWISE_API_KEY", "WORLDWISE_TABLE", "WORLDWISE_CLIENT_SIDE_IDS"):
        monkeypatch.delenv(key, raising=False)


def test_from_env_reads_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORLDWISE_SUPABASE_URL", "https://abc.supabase.co/")
    monkeypatch.setenv("WORLDWISE_API_KEY", "anon")
    monkeypatch.setenv("WORLDWISE_TABLE", "visits")
    monkeypatch.setenv("WORLDWISE_CLIENT_SIDE_IDS", "yes")

    config = WorldwiseConfig.from_env()

    assert config.rest_url == "https://abc.supabase.co"
    assert config.api_key == "anon"
    assert config.table == "visits"
    assert config.client_side_ids is True
    assert config.default_map_position == (40.0, 0.0)


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORLDWISE_SUPABASE_URL", "https://abc.supabase.co")
    monkeypatch.setenv("WORLDWISE_API_KEY", "anon")
    monkeypatch.setenv("WORLDWISE_CLIENT_SIDE_IDS", "1")

    config = WorldwiseConfig.from_env(api_key="service", client_side_ids=False)

    assert config.api_key == "service"
    assert config.client_side_ids is False
    assert config.table == "cities"


def test_missing_key_raises() -> None:
    with pytest.raises(WorldwiseConfigError):
        WorldwiseConfig.from_env(supabase_url="https://abc.supabase.co")
