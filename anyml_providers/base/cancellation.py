"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` can be passed to ``chat``; ``CancelledError`` is raised
by a stream that observes the cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
