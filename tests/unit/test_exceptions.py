import requests

from sfrecords.exceptions import (
    ErrorKind,
    MissingCredentialsError,
    NotAuthorizedError,
    SalesforceError,
)


def test_api_error_carries_status_and_body():
    err = SalesforceError.api(400, '[{"errorCode":"INVALID_FIELD"}]', "Failed to create Case record")
    assert err.kind is ErrorKind.API
    assert err.status == 400
    assert err.body == '[{"errorCode":"INVALID_FIELD"}]'
    assert str(err) == 'API error: Failed to create Case record. Status: 400 - [{"errorCode":"INVALID_FIELD"}]'


def test_parse_error_message():
    err = SalesforceError.parse("missing ID in response")
    assert err.kind is ErrorKind.PARSE
    assert err.status is None
    assert str(err) == "Parse error: missing ID in response"


def test_transport_error_wraps_cause():
    cause = requests.ConnectionError("Name or service not known")
    err = SalesforceError.transport(cause)
    assert err.kind is ErrorKind.TRANSPORT
    assert err.cause is cause
    assert "Request error: Name or service not known" == str(err)


def test_all_kinds_are_runtime_errors():
    for err in (
        SalesforceError.parse("x"),
        MissingCredentialsError(["PASSWORD"]),
        NotAuthorizedError("query records"),
    ):
        assert isinstance(err, RuntimeError)


def test_missing_credentials_lists_keys_and_source():
    err = MissingCredentialsError(["CONSUMER_KEY", "PASSWORD"], "salesforce_config.ini")
    assert err.missing == ["CONSUMER_KEY", "PASSWORD"]
    assert "salesforce_config.ini" in str(err)
    assert "CONSUMER_KEY, PASSWORD" in str(err)


def test_not_authorized_names_operation():
    err = NotAuthorizedError("insert Case record")
    assert err.operation == "insert Case record"
    assert "authorize()" in str(err)
