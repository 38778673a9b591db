"""Cooperative cancellation token.

A stream polls its token before every transport read; once the token is
cancelled the stream closes its connection and ends with
:class:`CancelledError`.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from .cancelled_error import CancelledError
from .state import State


class CancellationToken:
    """Cancellation flag shared between a caller and the streams it started.

    ``cancel`` may be called from any thread, including one other than the
    event loop driving the stream. Tokens form a tree: cancelling a token
    cancels every token derived from it with :meth:`child`, never its parent.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._lock = Lock()
        self._state = State()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:
        """Reason given to the first :meth:`cancel` call."""
        return self._state.reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Mark the token (and its descendants) cancelled; later calls are no-ops."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state = State(cancelled=True, reason=reason)
            descendants, self._children = self._children, []
        for token in descendants:
            token.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token`` below this one; it is cancelled at once if we already are."""
        with self._lock:
            state = self._state
            if not state.cancelled:
                self._children.append(token)
        if state.cancelled:
            token.cancel(state.reason)
        return token

    def child(self) -> "CancellationToken":
        return type(self)(parent=self)

    def raise_if_cancelled(self, *, provider: str = "unknown", model: Optional[str] = None) -> None:
        state = self._state
        if state.cancelled:
            raise CancelledError(message=state.reason or "operation cancelled", provider=provider, model=model)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        state = self._state
        return f"<CancellationToken cancelled={state.cancelled} reason={state.reason!r}>"


__all__ = ["CancellationToken"]
