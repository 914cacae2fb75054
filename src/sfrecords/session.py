from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from .config import SFConfig
from .exceptions import SalesforceError
from .logging_config import mask_secret
from .transport import decode_json, require_str, send

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Bearer token plus the tenant instance URL it is valid for.

    Only produced by :func:`authorize`; never refreshed or persisted.
    """

    access_token: str
    instance_url: str
    api_version: str = "60.0"

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    @property
    def data_root(self) -> str:
        version = self.api_version.lstrip("vV")
        return f"{self.instance_url.rstrip('/')}/services/data/v{version}"

    def data_url(self, path: str) -> str:
        return f"{self.data_root}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        return (
            f"AuthSession(instance_url={self.instance_url!r}, "
            f"api_version={self.api_version!r}, access_token={mask_secret(self.access_token)!r})"
        )


def authorize(cfg: SFConfig, http: Optional[requests.Session] = None) -> AuthSession:
    """Exchange username/password credentials for an :class:`AuthSession`.

    Raises:
        MissingCredentialsError: credentials are blank or placeholders.
        SalesforceError: transport failure, non-200 status, or a body
            without ``access_token`` / ``instance_url``.
    """
    cfg.require_complete()

    data = {
        "grant_type": "password",
        "client_id": cfg.consumer_key,
        "client_secret": cfg.consumer_secret,
        "username": cfg.username,
        "password": cfg.oauth_password,
    }

    _logger.info("Requesting access token for %s from %s", cfg.username, cfg.token_request_url)
    r = send(http, "POST", cfg.token_request_url, data=data, timeout=cfg.timeout)

    if r.status_code != 200:
        raise SalesforceError.api(r.status_code, r.text, "Token request failed")

    payload = decode_json(r)
    session = AuthSession(
        access_token=require_str(payload, "access_token", "access_token"),
        instance_url=require_str(payload, "instance_url", "instance_url"),
        api_version=cfg.api_version,
    )

    _logger.info("Authorized against instance=%s", session.instance_url)
    _logger.debug("Access token: %s", mask_secret(session.access_token))
    return session
