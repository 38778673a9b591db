"""HTTP transport implementations."""

from .client import HttpxResponse, HttpxTransport

__all__ = ["HttpxTransport", "HttpxResponse"]
