"""Tests for the shared HTTP helpers."""

from unittest.mock import MagicMock, patch

import requests

from common.http_client import get_json, robust_get
from constants import Constants


def response(status, text="", headers=None):
    return MagicMock(status_code=status, text=text, headers=headers or {})


@patch("common.http_client.time.sleep")
@patch("common.http_client.requests.get")
def test_get_json_parses_body(mock_get, _sleep):
    mock_get.return_value = response(200, '[{"name": "v1.0.0"}]', {"Link": "x"})
    status, headers, data = get_json("https://api.example.test/tags", headers={"Accept": "a"})
    assert status == 200
    assert headers == {"Link": "x"}
    assert data == [{"name": "v1.0.0"}]
    assert mock_get.call_args[1]["timeout"] == Constants.REQUEST_TIMEOUT
    assert mock_get.call_args[1]["headers"] == {"Accept": "a"}


@patch("common.http_client.time.sleep")
@patch("common.http_client.requests.get")
def test_get_json_invalid_body(mock_get, _sleep):
    mock_get.return_value = response(200, "<html>")
    assert get_json("https://api.example.test/tags")[2] is None


@patch("common.http_client.time.sleep")
@patch("common.http_client.requests.get")
def test_client_errors_are_not_retried(mock_get, _sleep):
    mock_get.return_value = response(404, '{"message": "Not Found"}')
    status, _, data = get_json("https://api.example.test/missing")
    assert status == 404
    assert data is None
    assert mock_get.call_count == 1


@patch("common.http_client.time.sleep")
@patch("common.http_client.requests.get")
def test_server_errors_are_retried(mock_get, mock_sleep):
    mock_get.side_effect = [response(502), response(200, "{}")]
    status, _, _ = robust_get("https://api.example.test/")
    assert status == 200
    assert mock_get.call_count == 2
    mock_sleep.assert_called_once()


@patch("common.http_client.time.sleep")
@patch("common.http_client.requests.get")
def test_all_attempts_fail(mock_get, _sleep):
    mock_get.side_effect = requests.Timeout()
    status, headers, text = robust_get("https://api.example.test/")
    assert status == 0
    assert headers == {}
    assert "timeout" in text
    assert mock_get.call_count == Constants.HTTP_RETRY_MAX
