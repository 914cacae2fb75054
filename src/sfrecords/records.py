"""Record create and SOQL query against an authorized session."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from .config import DEFAULT_TIMEOUT
from .exceptions import SalesforceError
from .session import AuthSession
from .transport import decode_json, require_str, send

_logger = logging.getLogger(__name__)


def insert_record(
    session: AuthSession,
    object_type: str,
    fields: Mapping[str, Any],
    http: Optional[requests.Session] = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Create one ``object_type`` record and return its new Id.

    ``fields`` is sent as the JSON body unchanged; Salesforce does the validation.
    """
    url = session.data_url(f"sobjects/{object_type}")
    r = send(http, "POST", url, json=dict(fields), headers=session.headers, timeout=timeout)

    if r.status_code != 201:
        raise SalesforceError.api(r.status_code, r.text, f"Failed to create {object_type} record")

    record_id = require_str(decode_json(r), "id", "ID")
    _logger.info("Created %s %s", object_type, record_id)
    return record_id


def query_records(
    session: AuthSession,
    soql: str,
    http: Optional[requests.Session] = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """Run a SOQL query and return the decoded response verbatim.

    Only the first page is returned; ``nextRecordsUrl`` is left to the caller.
    """
    url = session.data_url("query")
    r = send(http, "GET", url, params={"q": soql}, headers=session.headers, timeout=timeout)

    if r.status_code != 200:
        raise SalesforceError.api(r.status_code, r.text, "Failed to query records")

    result = decode_json(r)
    if isinstance(result, dict):
        _logger.debug("Query returned totalSize=%s done=%s", result.get("totalSize"), result.get("done"))
    return result
