"""In-memory transport used by tests and offline examples."""

from .transport import MockResponse, MockTransport

__all__ = ["MockTransport", "MockResponse"]
