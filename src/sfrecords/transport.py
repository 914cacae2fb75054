"""Single-shot HTTP helpers shared by the auth exchange and record operations."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from .exceptions import SalesforceError

_logger = logging.getLogger(__name__)


def new_http_session() -> requests.Session:
    http = requests.Session()
    http.headers.update({"Accept": "application/json"})
    return http


def send(
    http: Optional[requests.Session],
    method: str,
    url: str,
    *,
    timeout: float,
    **kwargs: Any,
) -> requests.Response:
    """Issue one request; network failures become ``SalesforceError.transport``.

    No retries: every failure goes straight back to the caller.
    """
    client = http if http is not None else new_http_session()
    _logger.debug("%s %s", method, url)
    try:
        return client.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        raise SalesforceError.transport(e) from e
    finally:
        # Bodies are read eagerly, so a throwaway session can be closed here.
        if http is None:
            client.close()


def decode_json(response: requests.Response) -> Any:
    """Decode a response body, mapping decoder failures to a parse error."""
    try:
        return json.loads(response.text)
    except ValueError as e:
        raise SalesforceError.parse(str(e)) from e


def require_str(payload: Any, key: str, what: str) -> str:
    value = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(value, str) or not value:
        raise SalesforceError.parse(f"missing {what} in response")
    return value
