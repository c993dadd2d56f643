"""Data source error taxonomy and presentation-only classification."""

import asyncio

import httpx

from ecommerce_dashboard.models.data_models import ErrorKind


class DataSourceError(Exception):
    """Base class for failures raised by a data source."""


class ConnectivityError(DataSourceError):
    """Transient failure: timeout, server unavailable, connection failure."""


class DataError(DataSourceError):
    """The requested key exists but has no associated data."""


# Transport-level failures from any client count as connectivity
_CONNECTIVITY_TYPES = (
    ConnectivityError,
    httpx.TimeoutException,
    httpx.TransportError,
    asyncio.TimeoutError,
    ConnectionError,
)

ERROR_PREFIXES = {
    ErrorKind.CONNECTIVITY: "Network Error",
    ErrorKind.NOT_FOUND: "Data Error",
    ErrorKind.UNEXPECTED: "Unexpected Error",
}


def classify_error(error: BaseException) -> ErrorKind:
    """
    Classify a terminal failure for logging.

    The retry and orchestration logic never call this; it only picks the
    prefix shown in the transcript and the kind stored on failure records.
    """
    if isinstance(error, _CONNECTIVITY_TYPES):
        return ErrorKind.CONNECTIVITY
    if isinstance(error, DataError):
        return ErrorKind.NOT_FOUND
    return ErrorKind.UNEXPECTED


def error_prefix(error: BaseException) -> str:
    """Return the transcript prefix for an error."""
    return ERROR_PREFIXES[classify_error(error)]
