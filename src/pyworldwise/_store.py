"""Remote table store backed by Supabase's PostgREST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyworldwise._constants import REST_PREFIX
from pyworldwise._redact import redact_headers
from pyworldwise.config import WorldwiseConfig
from pyworldwise.exceptions import CityNotFoundError, StoreOperationError

_logger = logging.getLogger(__name__)


class RemoteStore(Protocol):
    """Structural table interface used by the collection service.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`PostgrestStore`) concrete.
    Every method raises :class:`StoreOperationError` on failure.
    """

    async def list_rows(self) -> list[dict[str, Any]]:
        ...

    async def get_by_id(self, record_id: str) -> dict[str, Any]:
        ...

    async def insert(self, row: Mapping[str, Any]) -> dict[str, Any]:
        ...

    async def delete_by_id(self, record_id: str) -> None:
        ...


class PostgrestStore:
    """Table store that speaks PostgREST over an aiohttp session."""

    def __init__(self, config: WorldwiseConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._endpoint = f"{REST_PREFIX}/{config.table}"

    def _headers(self, *, representation: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self._config.api_key,
            "authorization": f"Bearer {self._config.api_key}",
            "accept": "application/json",
        }
        if representation:
            headers["content-type"] = "application/json"
            headers["prefer"] = "return=representation"
        return headers

    async def _request(
        self,
        method: str,
        *,
        params: Mapping[str, str],
        body: Any = None,
        representation: bool = False,
    ) -> Any:
        url = f"{self._config.rest_url}{self._endpoint}"
        headers = self._headers(representation=representation)
        data = json.dumps(body, separators=(",", ":")) if body is not None else None

        _logger.debug("%s %s params=%s headers=%s", method, url, dict(params), redact_headers(headers))

        try:
            async with self._http.request(method, url, params=params, data=data, headers=headers) as resp:
                text = await resp.text()
                if resp.status >= 400:
                    raise StoreOperationError(
                        f"HTTP {resp.status} from {method} {self._endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=self._endpoint,
                    )
        except StoreOperationError:
            raise
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as exc:
            raise StoreOperationError(
                f"{method} {self._endpoint} failed: {exc!r}",
                endpoint=self._endpoint,
            ) from exc

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreOperationError(
                f"Invalid JSON from {self._endpoint}: {text[:200]}",
                endpoint=self._endpoint,
            ) from exc

    def _rows(self, decoded: Any) -> list[dict[str, Any]]:
        if not isinstance(decoded, list) or not all(isinstance(row, dict) for row in decoded):
            raise StoreOperationError(
                f"Expected a list of rows from {self._endpoint}",
                endpoint=self._endpoint,
            )
        return decoded

    async def list_rows(self) -> list[dict[str, Any]]:
        return self._rows(await self._request("GET", params={"select": "*"}))

    async def get_by_id(self, record_id: str) -> dict[str, Any]:
        rows = self._rows(await self._request("GET", params={"select": "*", "id": f"eq.{record_id}"}))
        if not rows:
            raise CityNotFoundError(f"No row with id {record_id!r}", endpoint=self._endpoint)
        return rows[0]

    async def insert(self, row: Mapping[str, Any]) -> dict[str, Any]:
        rows = self._rows(
            await self._request("POST", params={"select": "*"}, body=[dict(row)], representation=True)
        )
        if not rows:
            raise StoreOperationError(f"Insert into {self._endpoint} returned no row", endpoint=self._endpoint)
        return rows[0]

    async def delete_by_id(self, record_id: str) -> None:
        await self._request("DELETE", params={"id": f"eq.{record_id}"})
