"""Create and query Salesforce records over the REST API (OAuth2 password grant)."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sfrecords")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Keep library modules quiet unless the app configures logging:
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .api import SalesforceClient  # noqa: E402
from .config import SFConfig, load_config  # noqa: E402
from .exceptions import (  # noqa: E402
    ErrorKind,
    MissingCredentialsError,
    NotAuthorizedError,
    SalesforceError,
)
from .records import insert_record, query_records  # noqa: E402
from .session import AuthSession, authorize  # noqa: E402

__all__ = [
    "AuthSession",
    "ErrorKind",
    "MissingCredentialsError",
    "NotAuthorizedError",
    "SFConfig",
    "SalesforceClient",
    "SalesforceError",
    "authorize",
    "insert_record",
    "load_config",
    "query_records",
]
