import json

import pytest

from sfrecords.config import SFConfig

SF_ENV_VARS = (
    "SF_CONFIG_FILE",
    "SF_CONSUMER_KEY",
    "SF_CONSUMER_SECRET",
    "SF_USERNAME",
    "SF_PASSWORD",
    "SF_SECURITY_TOKEN",
    "SF_ENDPOINT",
    "SF_API_VERSION",
    "SF_TIMEOUT",
)


class DummyResponse:
    """Just enough of requests.Response for the code under test."""

    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test in an empty cwd with no SF_* overrides."""
    monkeypatch.chdir(tmp_path)
    for name in SF_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def respond():
    """Factory for fake HTTP responses."""
    return DummyResponse


@pytest.fixture
def cfg():
    return SFConfig(
        consumer_key="3MVG9-key",
        consumer_secret="secret-123",
        username="ops@example.com",
        password="hunter2",
        security_token="TOKEN42",
        endpoint="https://login.salesforce.com/",
        api_version="60.0",
        timeout=12.5,
    )
