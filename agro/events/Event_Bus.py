"""Simple Event Bus / Observer implementation for farm notifications.

Event names:
  weather.alert_rain -> payload {"title": str, "body": str, "tag": str, "rain_chance": int, "date": str}
  weather.alert_wind -> payload {"title": str, "body": str, "tag": str, "wind": int, "date": str}
  vegetable.image_ready -> payload {"vegetable": Vegetable, "temp_id": int}
  vegetable.image_failed -> payload {"vegetable": Vegetable, "temp_id": int, "error": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
import logging
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
WEATHER_ALERT_RAIN = "weather.alert_rain"
WEATHER_ALERT_WIND = "weather.alert_wind"
VEGETABLE_IMAGE_READY = "vegetable.image_ready"
VEGETABLE_IMAGE_FAILED = "vegetable.image_failed"


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
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'create_event',
	'WEATHER_ALERT_RAIN', 'WEATHER_ALERT_WIND', 'VEGETABLE_IMAGE_READY', 'VEGETABLE_IMAGE_FAILED'
]
