"""Data source access with retry and error classification."""

from .data_source import DataSource, RandomFailurePolicy, SimulatedDataSource
from .errors import ConnectivityError, DataError, DataSourceError, classify_error
from .http_client import AsyncHTTPClient, HttpDataSource
from .retry_handler import RetryHandler, retry

__all__ = [
    "AsyncHTTPClient",
    "ConnectivityError",
    "DataError",
    "DataSource",
    "DataSourceError",
    "HttpDataSource",
    "RandomFailurePolicy",
    "RetryHandler",
    "SimulatedDataSource",
    "classify_error",
    "retry",
]
