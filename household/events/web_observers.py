"""Web-facing observers for ledger and grocery events.

Every event published on the bus is copied into a bounded in-memory buffer that the
API serves at /api/events, so a client can refresh chore lists and member totals
after a change made elsewhere.

Events carry an increasing integer id. A client passes the last id it saw as
since=<id> and receives only newer events plus next_cursor for its next poll.
The buffer is per process and keeps at most MAX_RECENT_EVENTS entries.
"""
from __future__ import annotations
import itertools
import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, Dict, Optional

from household.utilities.config import MAX_RECENT_EVENTS
from .Event_Bus import GLOBAL_EVENT_BUS, ALL_EVENTS

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool, type(None))

_lock = Lock()
_buffer: Deque[Dict[str, Any]] = deque(maxlen=MAX_RECENT_EVENTS)
_ids = itertools.count(1)
_subscribed_to = set()


def _record(event_name: str, payload: Any):
    fields = {}
    if isinstance(payload, dict):
        # only JSON scalars make it into the feed
        fields = {k: v for k, v in payload.items() if isinstance(v, _SCALARS)}
    with _lock:
        entry = dict(fields)
        entry.update(id=next(_ids), type=event_name, ts=datetime.now(timezone.utc).isoformat())
        _buffer.append(entry)


def start(bus=GLOBAL_EVENT_BUS):
    """Subscribe the recorder to every event of bus. Calling it again for the same bus does nothing."""
    if id(bus) in _subscribed_to:
        return
    for name in ALL_EVENTS:
        bus.subscribe(name, _record)
    _subscribed_to.add(id(bus))
    logger.debug("Web observers subscribed to %d event types", len(ALL_EVENTS))


def get_events(since: Optional[int] = None) -> Dict[str, Any]:
    """Events with an id greater than since (all buffered events when since is None)."""
    with _lock:
        events = [e for e in _buffer if since is None or e['id'] > since]
        next_cursor = _buffer[-1]['id'] if _buffer else (since or 0)
    return {'events': events, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
