"""Root test configuration: reset logging between tests"""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo structlog configuration done by CLI invocations (bound to the runner's streams)."""
    yield
    structlog.reset_defaults()
