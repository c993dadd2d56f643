"""Unit tests for error classification."""

import asyncio

import httpx
import pytest

from ecommerce_dashboard.fetcher.errors import (
    ConnectivityError,
    DataError,
    DataSourceError,
    classify_error,
    error_prefix,
)
from ecommerce_dashboard.models.data_models import ErrorKind


def test_taxonomy_shares_base_class():
    assert issubclass(ConnectivityError, DataSourceError)
    assert issubclass(DataError, DataSourceError)
    assert not issubclass(DataError, ConnectivityError)


@pytest.mark.parametrize("error, kind", [
    (ConnectivityError("Network connection timeout"), ErrorKind.CONNECTIVITY),
    (httpx.ReadTimeout("read timed out"), ErrorKind.CONNECTIVITY),
    (httpx.ConnectError("refused"), ErrorKind.CONNECTIVITY),
    (asyncio.TimeoutError(), ErrorKind.CONNECTIVITY),
    (ConnectionResetError(), ErrorKind.CONNECTIVITY),
    (DataError("No reviews found for product 6"), ErrorKind.NOT_FOUND),
    (ValueError("bad payload"), ErrorKind.UNEXPECTED),
    (DataSourceError("other"), ErrorKind.UNEXPECTED),
])
def test_classify_error(error, kind):
    assert classify_error(error) is kind


def test_prefixes_are_distinct():
    prefixes = {
        error_prefix(ConnectivityError("x")),
        error_prefix(DataError("x")),
        error_prefix(RuntimeError("x")),
    }
    assert prefixes == {"Network Error", "Data Error", "Unexpected Error"}
