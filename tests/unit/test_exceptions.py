from __future__ import annotations

import pytest

from storagenet.exceptions import BandwidthLimitExceeded, ServerError, StorageNetError

TEST_URL = "https://dl.example.com/file/abc"


def test_server_error_attributes() -> None:
    error = ServerError("quota exhausted", url=TEST_URL, status_code=402)
    assert isinstance(error, StorageNetError)
    assert error.message == "quota exhausted"
    assert error.url == TEST_URL
    assert error.status_code == 402
    assert str(error) == "quota exhausted"


def test_server_error_defaults() -> None:
    error = ServerError("refused")
    assert error.url is None
    assert error.status_code is None


def test_bandwidth_limit_exceeded_is_server_error() -> None:
    assert issubclass(BandwidthLimitExceeded, ServerError)


def test_bandwidth_limit_exceeded_message() -> None:
    error = BandwidthLimitExceeded(url=TEST_URL)
    assert error.status_code == 509
    assert error.url == TEST_URL
    assert str(error) == f"Bandwidth limit exceeded (status 509) for {TEST_URL}"


def test_bandwidth_limit_exceeded_without_url() -> None:
    assert str(BandwidthLimitExceeded()) == "Bandwidth limit exceeded (status 509)"


def test_bandwidth_limit_exceeded_can_be_caught_as_server_error() -> None:
    with pytest.raises(ServerError, match=r"Bandwidth limit exceeded"):
        raise BandwidthLimitExceeded
