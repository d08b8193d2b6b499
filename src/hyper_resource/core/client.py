import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import HyperResourceClientError, HyperResourceParseError


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 0  # extra attempts; retrying is opt-in
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_on_429: bool = False


@dataclass(frozen=True)
class HalResponse:
    status_code: int
    url: str
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HyperClient:
    """
    Minimal async GET client for HAL+JSON resources.
    - Handles base URL, default headers, timeouts and optional retries
    - Returns every HTTP status to the caller; only transport failures raise
    - Parses successful bodies into plain dicts
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Optional[Mapping[str, str]] = None,
        auth: Optional[httpx.Auth | tuple[str, str]] = None,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("hyper_resource.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            auth=auth,
            headers={"Accept": "application/hal+json", **dict(headers or {})},
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HyperClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def get(
        self, url: str, *, params: Optional[Dict[str, Any]] = None
    ) -> HalResponse:
        """
        Issue a GET against `url` (relative to base_url or absolute).
        - Retries transient failures only when RetryConfig allows it
        - Returns non-2xx responses with an empty body instead of raising
        - Raises HyperResourceClientError on network/timeout errors
        - Raises HyperResourceParseError if a 2xx body isn't a JSON object
        """
        start = time.perf_counter()
        attempt = 0

        while True:
            try:
                resp = await self.http.get(url, params=params)
                duration_ms = int((time.perf_counter() - start) * 1000)

                self.log.debug(
                    "op.request",
                    extra={
                        "url": str(resp.request.url),
                        "status": resp.status_code,
                        "duration_ms": duration_ms,
                        "attempt": attempt,
                    },
                )

                if resp.status_code in self.retry.retry_statuses or (
                    self.retry.retry_on_429 and resp.status_code == 429
                ):
                    if attempt < self.retry.max_retries:
                        await asyncio.sleep(
                            self.retry.backoff_base_seconds * (2**attempt)
                        )
                        attempt += 1
                        continue

                if resp.status_code < 200 or resp.status_code >= 300:
                    return HalResponse(
                        status_code=resp.status_code, url=str(resp.request.url)
                    )

                return HalResponse(
                    status_code=resp.status_code,
                    url=str(resp.request.url),
                    body=self._safe_json(resp),
                )

            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                if attempt < self.retry.max_retries:
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise HyperResourceClientError(
                    f"Network/timeout error calling GET {url}: {exc}"
                ) from exc

            except httpx.HTTPError as exc:
                raise HyperResourceClientError(
                    f"HTTPX error calling GET {url}: {exc}"
                ) from exc

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # 204 No Content and friends
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except Exception as exc:
            snippet = (resp.text or "")[:500]
            raise HyperResourceParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise HyperResourceParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data


__all__ = ["HyperClient", "HalResponse", "RetryConfig"]
