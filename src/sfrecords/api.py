from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from . import records
from .config import SFConfig, load_config
from .exceptions import NotAuthorizedError
from .session import AuthSession, authorize
from .transport import new_http_session

__author__ = "sfrecords contributors"
__copyright__ = "sfrecords contributors"
__license__ = "MIT"

_logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Main API client
# ----------------------------------------------------------------------
class SalesforceClient:
    """Password-grant Salesforce client with one pooled HTTP session."""

    def __init__(
        self,
        cfg: Optional[SFConfig] = None,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.cfg = cfg or load_config()
        self.http = http if http is not None else new_http_session()
        self.session: Optional[AuthSession] = None

    # --------------------------- Public methods -----------------------

    @property
    def is_authorized(self) -> bool:
        return self.session is not None

    def authorize(self) -> AuthSession:
        """Log in and keep the new session; a failure keeps the previous one."""
        new_session = authorize(self.cfg, self.http)
        self.session = new_session
        return new_session

    def insert_record(self, object_type: str, fields: Mapping[str, Any]) -> str:
        """Create a record, returning its Id."""
        session = self._require_session(f"insert {object_type} record")
        return records.insert_record(session, object_type, fields, self.http, timeout=self.cfg.timeout)

    def query_records(self, soql: str) -> Any:
        """Run a SOQL query, returning the raw JSON result."""
        session = self._require_session("query records")
        return records.query_records(session, soql, self.http, timeout=self.cfg.timeout)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> SalesforceClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --------------------------- Internal helpers --------------------

    def _require_session(self, operation: str) -> AuthSession:
        if self.session is None:
            raise NotAuthorizedError(operation)
        return self.session
