"""Client configuration for pyworldwise."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyworldwise._constants import CITIES_TABLE, DEFAULT_MAP_POSITION
from pyworldwise.exceptions import WorldwiseConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class WorldwiseConfig:
    """Client configuration.

    Parameters
    ----------
    supabase_url : str
        Base URL of the Supabase project (``https://<ref>.supabase.co``).
    api_key : str
        Project API key, sent as both ``apikey`` and bearer token.
    table : str
        Name of the table holding city rows.
    client_side_ids : bool
        Generate record ids locally instead of letting the table assign
        them.  Off by default; when enabled the full 128-bit random id
        is used.
    default_map_position : tuple of float
        Map center used until any position input resolves.
    """

    supabase_url: str
    api_key: str
    table: str = CITIES_TABLE
    client_side_ids: bool = False
    default_map_position: tuple[float, float] = DEFAULT_MAP_POSITION

    @property
    def rest_url(self) -> str:
        return self.supabase_url.rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> WorldwiseConfig:
        """Create configuration from environment variables.

        Reads ``WORLDWISE_SUPABASE_URL``, ``WORLDWISE_API_KEY`` and the
        optional ``WORLDWISE_TABLE`` / ``WORLDWISE_CLIENT_SIDE_IDS``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        WorldwiseConfigError
            If the URL or API key is missing after applying overrides.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "WORLDWISE_SUPABASE_URL": "supabase_url",
            "WORLDWISE_API_KEY": "api_key",
            "WORLDWISE_TABLE": "table",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "client_side_ids" not in overrides:
            config_kwargs["client_side_ids"] = _env_bool(env.get("WORLDWISE_CLIENT_SIDE_IDS"), False)

        config_kwargs.update(overrides)

        for required in ("supabase_url", "api_key"):
            if not config_kwargs.get(required):
                raise WorldwiseConfigError(f"Missing required setting: {required}")

        return cls(**config_kwargs)
