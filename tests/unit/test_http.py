r"""Unit tests for the single GET and POST operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

from storagenet.exceptions import BandwidthLimitExceeded
from storagenet.http import (
    RATE_LIMIT_STATUS_CODE,
    ResponseClass,
    ResponseResult,
    get_content,
    post,
)
from storagenet.transport import RequestSpec

if TYPE_CHECKING:
    from collections.abc import Generator

    from storagenet.core import Options

API_URL = "https://g.api.example.com/cs?id=1"
DOWNLOAD_URL = "https://dl.example.com/file/abc"


@pytest.fixture
def mock_build_client(mock_client: httpx.Client) -> Generator[Mock, None, None]:
    with patch("storagenet.http.build_client", return_value=mock_client) as mock:
        yield mock


####################################
#     Tests for ResponseResult     #
####################################


def test_response_result_rate_limited() -> None:
    result = ResponseResult(status_code=RATE_LIMIT_STATUS_CODE, content=b"")
    assert result.classification is ResponseClass.RATE_LIMITED
    assert result.is_rate_limited


@pytest.mark.parametrize(
    ("status_code", "content"), [(509, b"-17"), (200, b""), (200, b"data"), (500, b"")]
)
def test_response_result_normal(status_code: int, content: bytes) -> None:
    result = ResponseResult(status_code=status_code, content=content)
    assert result.classification is ResponseClass.NORMAL
    assert not result.is_rate_limited


def test_response_result_from_response() -> None:
    response = httpx.Response(
        201,
        content="hé".encode("latin-1"),
        headers={"Content-Type": "text/plain; charset=latin-1"},
    )
    result = ResponseResult.from_response(response)

    assert result.status_code == 201
    assert result.content == b"h\xe9"
    assert result.headers["Content-Type"] == "text/plain; charset=latin-1"
    assert result.text == "hé"


def test_response_result_text_default_encoding() -> None:
    assert ResponseResult(status_code=200, content=b'{"a":1}').text == '{"a":1}'


#################################
#     Tests for get_content     #
#################################


def test_get_content_returns_body(
    options: Options, mock_client: httpx.Client, mock_build_client: Mock
) -> None:
    mock_client.get = Mock(return_value=httpx.Response(200, content=b"\x00payload"))

    assert get_content(DOWNLOAD_URL, options) == b"\x00payload"
    mock_build_client.assert_called_once_with(RequestSpec(DOWNLOAD_URL), options)
    mock_client.get.assert_called_once_with("/file/abc")
    mock_client.close.assert_called_once()


def test_get_content_rate_limited(
    options: Options, mock_client: httpx.Client, mock_build_client: Mock  # noqa: ARG001
) -> None:
    mock_client.get = Mock(return_value=httpx.Response(509, content=b""))

    with pytest.raises(BandwidthLimitExceeded) as exc_info:
        get_content(DOWNLOAD_URL, options)

    assert exc_info.value.status_code == 509
    assert exc_info.value.url == DOWNLOAD_URL
    mock_client.close.assert_called_once()


def test_get_content_509_with_body_is_data(
    options: Options, mock_client: httpx.Client, mock_build_client: Mock  # noqa: ARG001
) -> None:
    mock_client.get = Mock(return_value=httpx.Response(509, content=b"not empty"))
    assert get_content(DOWNLOAD_URL, options) == b"not empty"


@pytest.mark.parametrize("status_code", [200, 404, 500])
def test_get_content_any_status_returns_body(
    options: Options,
    mock_client: httpx.Client,
    mock_build_client: Mock,  # noqa: ARG001
    status_code: int,
) -> None:
    mock_client.get = Mock(return_value=httpx.Response(status_code, content=b"body"))
    assert get_content(DOWNLOAD_URL, options) == b"body"


def test_get_content_transport_error_propagates(
    options: Options, mock_client: httpx.Client, mock_build_client: Mock  # noqa: ARG001
) -> None:
    error = httpx.ConnectError("Connection refused")
    mock_client.get = Mock(side_effect=error)

    with pytest.raises(httpx.ConnectError) as exc_info:
        get_content(DOWNLOAD_URL, options)

    assert exc_info.value is error
    mock_client.close.assert_called_once()


def test_get_content_logs_binary_placeholder(
    options: Options,
    mock_client: httpx.Client,
    mock_build_client: Mock,  # noqa: ARG001
    caplog: pytest.LogCaptureFixture,
) -> None:
    mock_client.get = Mock(return_value=httpx.Response(200, content=bytes(1000)))

    with caplog.at_level(logging.DEBUG, logger="storagenet.http"):
        get_content(DOWNLOAD_URL, options)

    assert caplog.messages == ["REP GET 200 <binary data, 1000 bytes>"]


##########################
#     Tests for post     #
##########################


def test_post_sends_keep_alive(
    options: Options, mock_client: httpx.Client, mock_build_client: Mock
) -> None:
    mock_client.post = Mock(return_value=httpx.Response(200, json=[0]))

    result = post(API_URL, '[{"a":"us"}]', options)

    assert result.status_code == 200
    assert result.content == b"[0]"
    assert result.text == "[0]"
    mock_build_client.assert_called_once_with(RequestSpec(API_URL, body='[{"a":"us"}]'), options)
    mock_client.post.assert_called_once_with(
        "/cs?id=1", content='[{"a":"us"}]', headers={"Connection": "keep-alive"}
    )
    mock_client.close.assert_called_once()


@pytest.mark.parametrize("status_code", [400, 500, 509])
def test_post_never_raises_on_status(
    options: Options,
    mock_client: httpx.Client,
    mock_build_client: Mock,  # noqa: ARG001
    status_code: int,
) -> None:
    mock_client.post = Mock(return_value=httpx.Response(status_code, content=b""))

    result = post(API_URL, "[]", options)

    assert result.status_code == status_code
    assert result.content == b""


def test_post_transport_error_propagates(
    options: Options, mock_client: httpx.Client, mock_build_client: Mock  # noqa: ARG001
) -> None:
    mock_client.post = Mock(side_effect=httpx.ReadTimeout("timed out"))

    with pytest.raises(httpx.ReadTimeout, match=r"timed out"):
        post(API_URL, "[]", options)
    mock_client.close.assert_called_once()


def test_post_logs_truncated_request_and_response(
    options: Options,
    mock_client: httpx.Client,
    mock_build_client: Mock,  # noqa: ARG001
    caplog: pytest.LogCaptureFixture,
) -> None:
    data = '[{"a":"p","t":"' + "x" * 100 + '"}]'
    body = '[{"f":"' + "y" * 80 + '"}]'
    mock_client.post = Mock(
        return_value=httpx.Response(
            200, content=body.encode(), headers={"Content-Type": "application/json"}
        )
    )

    with caplog.at_level(logging.DEBUG, logger="storagenet.http"):
        post(API_URL, data, options)

    assert len(caplog.records) == 2
    assert all(record.levelno == logging.DEBUG for record in caplog.records)
    assert caplog.messages[0] == f"REQ POST {API_URL} {data[:50]}..."
    assert caplog.messages[1].startswith('REP 200 [{"f":"yyy')
    assert caplog.messages[1].endswith("...")
    assert "y" * 60 not in caplog.messages[1]


def test_post_logs_binary_body_placeholder(
    options: Options,
    mock_client: httpx.Client,
    mock_build_client: Mock,  # noqa: ARG001
    caplog: pytest.LogCaptureFixture,
) -> None:
    mock_client.post = Mock(return_value=httpx.Response(200, content=b"\x01\x02\x03"))

    with caplog.at_level(logging.DEBUG, logger="storagenet.http"):
        post("https://up.example.com/ul/xyz/0", bytes(2048), options)

    assert caplog.messages == [
        "REQ POST https://up.example.com/ul/xyz/0 <binary data, 2048 bytes>",
        "REP 200 <binary data, 3 bytes>",
    ]
