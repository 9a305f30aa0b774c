"""JSON-over-HTTP session shared by the provider adapters and the remote caller."""
from __future__ import annotations

from typing import Any

import httpx

from brandpilot.llm.errors import NetworkError, RequestTimeoutError, error_from_status_code


def _decode(resp: httpx.Response) -> dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _describe_failure(body: dict[str, Any], fallback: str) -> tuple[str, str | None]:
    # Provider APIs nest {"message", "type"|"code"}; execute-node sends a bare string.
    err = body.get("error")
    if isinstance(err, dict):
        return err.get("message", fallback), err.get("type") or err.get("code")
    if isinstance(err, str) and err:
        return err, None
    return fallback, None


class ApiSession:
    """One base URL, fixed headers, JSON in and out.

    ``post_json`` returns the decoded object body. Failures surface as
    :mod:`brandpilot.llm.errors` types so callers handle one hierarchy.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str],
        *,
        provider: str = "",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.provider = provider
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"content-type": "application/json", **headers},
            timeout=timeout,
            transport=transport,
        )

    def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self._client.post(path, json=payload)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Request timed out: {exc}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Network error: {exc}", cause=exc) from exc

        body = _decode(resp)
        if resp.is_success:
            return body

        message, code = _describe_failure(body, resp.text or resp.reason_phrase)
        raise error_from_status_code(
            resp.status_code, message, provider=self.provider, error_code=code, raw=body
        )

    def close(self) -> None:
        self._client.close()
