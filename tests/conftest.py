"""Pytest configuration and shared fixtures."""

import io

import pytest
from rich.console import Console

from ecommerce_dashboard.models.config import DashboardConfig
from ecommerce_dashboard.monitoring.logger import StructuredLogger
from ecommerce_dashboard.pipeline.output import TranscriptReporter
from tests.fixtures.stub_sources import RecordingSleep


@pytest.fixture
def sample_config():
    """Provide the default retry policy: 3 retries, 1 second apart."""
    return DashboardConfig(max_retries=3, retry_delay=1.0, log_level="WARNING")


@pytest.fixture
def recording_sleep():
    """Sleep replacement so retries do not actually wait."""
    return RecordingSleep()


@pytest.fixture
def transcript():
    """Wide in-memory console; read the transcript with .file.getvalue()."""
    return Console(file=io.StringIO(), width=200, highlight=False, color_system=None)


@pytest.fixture
def reporter(transcript):
    return TranscriptReporter(transcript)


@pytest.fixture
def logger():
    return StructuredLogger(name="dashboard-test", level="DEBUG")
