from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    PARSE = "parse"
    API = "api"


class SalesforceError(RuntimeError):
    """A failed exchange with Salesforce, tagged with what went wrong.

    - ``TRANSPORT``: the HTTP call never completed (DNS, TLS, timeout...).
    - ``PARSE``: the response body did not have the expected JSON shape.
    - ``API``: Salesforce answered with an unexpected status code.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status: Optional[int] = None,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.message = message
        self.status = status
        self.body = body
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.kind is ErrorKind.TRANSPORT:
            return f"Request error: {self.message}"
        if self.kind is ErrorKind.PARSE:
            return f"Parse error: {self.message}"
        return f"API error: {self.message}. Status: {self.status} - {self.body}"

    @classmethod
    def transport(cls, cause: BaseException) -> SalesforceError:
        return cls(ErrorKind.TRANSPORT, str(cause), cause=cause)

    @classmethod
    def parse(cls, message: str) -> SalesforceError:
        return cls(ErrorKind.PARSE, message)

    @classmethod
    def api(cls, status: int, body: str, context: str) -> SalesforceError:
        return cls(ErrorKind.API, context, status=status, body=body)


class MissingCredentialsError(RuntimeError):
    """Raised when required Salesforce settings are empty or still placeholders."""

    def __init__(self, missing: list[str], source: Optional[str] = None):
        self.missing = missing
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Missing or placeholder Salesforce settings{where}: " + ", ".join(missing))


class NotAuthorizedError(RuntimeError):
    """Raised when a record operation is attempted before a successful login."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: not authorized, call authorize() first")
