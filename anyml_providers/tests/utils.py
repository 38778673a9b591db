"""Shared testing utilities.

Exports:
    - run(coro): drive a coroutine to completion on a fresh event loop.
    - events(records): decode the structured log payloads of captured records.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Coroutine, Dict, List, TypeVar

T = TypeVar("T")


def run(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def events(records: List[logging.LogRecord]) -> List[Dict[str, Any]]:
    """Return the JSON payloads of records produced by ``log_event``."""
    out: List[Dict[str, Any]] = []
    for record in records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict) and "event" in payload:
            out.append(payload)
    return out


def event_names(records: List[logging.LogRecord]) -> List[str]:
    return [e["event"] for e in events(records)]
