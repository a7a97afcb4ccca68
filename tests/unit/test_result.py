"""Unit tests for Result and the error taxonomy."""

import json

import pytest

from endpoint_client.exceptions import NetworkError, NetworkServiceError
from endpoint_client.result import Result


@pytest.mark.unit
@pytest.mark.parametrize(
    "error, description",
    [
        (NetworkError.URL_ERROR, "There is error with url"),
        (NetworkError.DECODING_ERROR, "There is error with decoding"),
        (NetworkError.RESPONSE_ERROR, "There is error with response code"),
        (NetworkError.DATA_ERROR, "There is error with data"),
        (NetworkError.PARAMETER_ERROR, "There is error with parameters"),
    ],
)
def test_error_descriptions(error, description):
    assert error.description == description


@pytest.mark.unit
def test_success_result():
    result = Result.success({"id": 1})
    assert result.is_success
    assert not result.is_failure
    assert result.error is None
    assert result.unwrap() == {"id": 1}


@pytest.mark.unit
def test_success_may_hold_none():
    result = Result.success(None)
    assert result.is_success
    assert result.unwrap() is None


@pytest.mark.unit
def test_failure_unwrap_raises():
    result = Result.failure(NetworkError.RESPONSE_ERROR)
    assert result.is_failure
    with pytest.raises(NetworkServiceError) as exc_info:
        result.unwrap()
    err = exc_info.value
    assert err.error is NetworkError.RESPONSE_ERROR
    assert str(err) == "There is error with response code"
    assert err.code == "responseError"


@pytest.mark.unit
def test_error_serialization():
    err = NetworkServiceError(NetworkError.DATA_ERROR, details={"status": 200})
    assert err.to_dict() == {
        "error": "dataError",
        "message": "There is error with data",
        "details": {"status": 200},
    }
    assert json.loads(err.to_json())["error"] == "dataError"


@pytest.mark.unit
def test_result_is_immutable():
    result = Result.success(1)
    with pytest.raises(AttributeError):
        result.value = 2
