from __future__ import annotations

import threading
import time
from typing import Any

_events: list[dict[str, Any]] = []
_lock = threading.Lock()


def record_event(event_type: str, data: dict[str, Any]) -> None:
    with _lock:
        _events.append({
            "type": event_type,
            "timestamp": time.time(),
            **data,
        })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    with _lock:
        if event_type is None:
            return list(_events)
        return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    with _lock:
        _events.clear()
