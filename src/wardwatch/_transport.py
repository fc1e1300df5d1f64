"""HTTP transport for the WAQI JSON API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from wardwatch._constants import USER_AGENT
from wardwatch._redact import redact_for_log
from wardwatch.config import WardWatchConfig
from wardwatch.exceptions import WardWatchTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`WaqiTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        ...


class WaqiTransport:
    """GET-only JSON transport that appends the API token to every request."""

    def __init__(
        self,
        config: WardWatchConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request and return the decoded JSON object.

        Raises
        ------
        WardWatchTransportError
            On network errors, timeouts, non-200 replies or a body that is
            not a JSON object.
        """
        query: dict[str, str] = dict(params or {})
        query["token"] = self._config.waqi_token

        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        url = f"{self._config.base_url}{endpoint}"

        _logger.debug("GET %s", url)
        if self._config.api_trace_enabled:
            _logger.debug("GET %s params=%s", endpoint, redact_for_log(query))

        try:
            async with self._http.get(url, params=query, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise WardWatchTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except WardWatchTransportError:
            raise
        except TimeoutError as exc:
            raise WardWatchTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise WardWatchTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise WardWatchTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise WardWatchTransportError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
            )

        if self._config.api_trace_enabled:
            _logger.debug("Response from %s: %s", endpoint, redact_for_log(body))

        return body
