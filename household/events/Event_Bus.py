"""Simple Event Bus / Observer implementation for ledger and grocery notifications.

Event names:
  chore.created / chore.updated / chore.deleted -> payload {"chore_id": str, "title": str}
  chore.completed -> payload {"chore_id": str, "title": str, "member_id": str | None}
  chore.paid -> payload {"chore_id": str, "title": str, "entries": int}
  member.paid -> payload {"member_id": str, "chores": int, "entries": int}
  grocery.replaced -> payload {"count": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
CHORE_CREATED = "chore.created"
CHORE_UPDATED = "chore.updated"
CHORE_DELETED = "chore.deleted"
CHORE_COMPLETED = "chore.completed"
CHORE_PAID = "chore.paid"
MEMBER_PAID = "member.paid"
GROCERY_REPLACED = "grocery.replaced"

ALL_EVENTS = (
	CHORE_CREATED, CHORE_UPDATED, CHORE_DELETED, CHORE_COMPLETED,
	CHORE_PAID, MEMBER_PAID, GROCERY_REPLACED,
)


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback in self._subscribers.get(event_name, []):
			self._subscribers[event_name].remove(callback)

	def publish(self, event_name: str, payload: Any):
		# Subscriber errors are logged, never raised to the publisher
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'ALL_EVENTS',
	'CHORE_CREATED', 'CHORE_UPDATED', 'CHORE_DELETED', 'CHORE_COMPLETED',
	'CHORE_PAID', 'MEMBER_PAID', 'GROCERY_REPLACED',
]
