"""Salesforce credentials: INI file bootstrap, parsing and env overrides."""

from __future__ import annotations

import configparser
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, List, Optional, Union

from .env_loader import load_env_files
from .exceptions import MissingCredentialsError

_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "salesforce_config.ini"
SECTION = "Salesforce"
DEFAULT_API_VERSION = "60.0"
DEFAULT_TIMEOUT = 30.0

# INI key -> placeholder written on first run. Order is the on-disk order.
PLACEHOLDERS: Dict[str, str] = {
    "SalesforceVersionNumber": DEFAULT_API_VERSION,
    "CONSUMER_KEY": "ConsumerKey",
    "CONSUMER_SECRET": "ConsumerSecret",
    "USERNAME": "LoginUsername",
    "PASSWORD": "LoginPassword",
    "TOKEN": "SecurityToken",
    "ENDPOINT": "salesforceinstanceurl",
}

# SFConfig field -> (INI key, environment override)
_FIELD_SOURCES: Dict[str, tuple] = {
    "api_version": ("SalesforceVersionNumber", "SF_API_VERSION"),
    "consumer_key": ("CONSUMER_KEY", "SF_CONSUMER_KEY"),
    "consumer_secret": ("CONSUMER_SECRET", "SF_CONSUMER_SECRET"),
    "username": ("USERNAME", "SF_USERNAME"),
    "password": ("PASSWORD", "SF_PASSWORD"),
    "security_token": ("TOKEN", "SF_SECURITY_TOKEN"),
    "endpoint": ("ENDPOINT", "SF_ENDPOINT"),
    "timeout": ("TIMEOUT", "SF_TIMEOUT"),
}

# The security token may legitimately be blank (trusted IP ranges).
_OPTIONAL_FIELDS = {"security_token", "api_version", "timeout"}


@dataclass(frozen=True)
class SFConfig:
    """Credentials and endpoint for the OAuth2 password grant."""

    consumer_key: str = ""
    consumer_secret: str = ""
    username: str = ""
    password: str = ""
    security_token: str = ""

    # Login host, e.g. https://login.salesforce.com (not the instance URL)
    endpoint: str = ""

    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT

    # Where the values came from, for error messages
    source: Optional[str] = None

    @property
    def token_request_url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/services/oauth2/token"

    @property
    def oauth_password(self) -> str:
        # Salesforce expects the security token appended to the password.
        return f"{self.password}{self.security_token}"

    def missing(self) -> List[str]:
        """INI keys that are blank or still hold their bootstrap placeholder."""
        out = []
        for name, (ini_key, _env) in _FIELD_SOURCES.items():
            value = getattr(self, name)
            if value == PLACEHOLDERS.get(ini_key) and name != "api_version":
                out.append(ini_key)
            elif not value and name not in _OPTIONAL_FIELDS:
                out.append(ini_key)
        return out

    def require_complete(self) -> None:
        missing = self.missing()
        if missing:
            raise MissingCredentialsError(missing, self.source)

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        shown = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("consumer_secret", "password", "security_token")
        }
        body = ", ".join(f"{k}={v!r}" for k, v in shown.items())
        return f"SFConfig({body})"


def default_config_path() -> Path:
    return Path(os.getenv("SF_CONFIG_FILE") or DEFAULT_CONFIG_FILE)


def write_default_config(path: Union[str, Path, None] = None) -> bool:
    """Create the INI file with placeholder values if it does not exist.

    Returns True when a new file was written.
    """
    path = Path(path) if path is not None else default_config_path()
    if path.exists():
        return False

    parser = _new_parser()
    parser[SECTION] = dict(PLACEHOLDERS)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        parser.write(f, space_around_delimiters=False)

    _logger.warning(
        "Config file '%s' has been created with placeholder values; edit it before logging in.",
        path,
    )
    return True


def load_config(path: Union[str, Path, None] = None, *, use_env: bool = True) -> SFConfig:
    """Load credentials from the INI file, creating it first if absent.

    Environment variables (``SF_CONSUMER_KEY``, ``SF_PASSWORD``...) override
    the file. Placeholder values are returned as-is; ``SFConfig.missing()``
    reports them and ``authorize`` refuses to use them.
    """
    path = Path(path) if path is not None else default_config_path()
    write_default_config(path)

    parser = _new_parser()
    try:
        with open(path, encoding="utf-8") as f:
            parser.read_file(f)
    except configparser.Error as e:
        raise MissingCredentialsError([f"[{SECTION}] (unreadable: {e})"], str(path)) from e
    if not parser.has_section(SECTION):
        raise MissingCredentialsError([f"[{SECTION}]"], str(path))
    section = parser[SECTION]

    if use_env:
        load_env_files(quiet=True)

    values: Dict[str, str] = {}
    for name, (ini_key, env_key) in _FIELD_SOURCES.items():
        raw = os.getenv(env_key) if use_env else None
        if raw is None:
            raw = section.get(ini_key)
        if raw is not None:
            values[name] = raw.strip()

    cfg = SFConfig(source=str(path))
    timeout = values.pop("timeout", None)
    if timeout:
        cfg = replace(cfg, timeout=_parse_timeout(timeout, str(path)))
    if not values.get("api_version"):
        values.pop("api_version", None)
    cfg = replace(cfg, **values)

    _logger.debug("Loaded Salesforce config from %s: %r", path, cfg)
    return cfg


def _parse_timeout(raw: str, source: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise MissingCredentialsError([f"TIMEOUT (not a number: {raw!r})"], source) from None
    # requests rejects zero/negative timeouts with a bare ValueError
    if not math.isfinite(value) or value <= 0:
        raise MissingCredentialsError([f"TIMEOUT (must be > 0: {raw!r})"], source)
    return value


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    # Keys such as SalesforceVersionNumber are case sensitive on disk.
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser
