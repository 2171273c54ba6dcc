"""Web-facing observers for farm events.

Subscribes to the GLOBAL_EVENT_BUS for weather alerts and vegetable image
outcomes, and keeps an in-memory ring buffer of recent notifications that the
web layer polls (``/api/alerts?since=<cursor>``).

Each event gets an auto-increment integer id (cursor) so clients only fetch
newer events. A Lock guards the buffer and MAX_EVENTS caps it.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS,
    VEGETABLE_IMAGE_FAILED,
    VEGETABLE_IMAGE_READY,
    WEATHER_ALERT_RAIN,
    WEATHER_ALERT_WIND,
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False

WATCHED_EVENTS = (WEATHER_ALERT_RAIN, WEATHER_ALERT_WIND, VEGETABLE_IMAGE_READY, VEGETABLE_IMAGE_FAILED)


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in ('title', 'body', 'tag', 'rain_chance', 'wind', 'date', 'temp_id', 'error'):
                if k in payload:
                    evt[k] = payload[k]
            veg = payload.get('vegetable')
            if veg is not None and hasattr(veg, 'name'):
                evt['name'] = veg.name
                evt['vegetable_id'] = veg.id
                evt['image_url'] = veg.image_url
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in WATCHED_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the whole buffer. ``next_cursor`` is the largest id
    so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    """Drop buffered events (cursor keeps increasing)."""
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear', 'MAX_EVENTS']
