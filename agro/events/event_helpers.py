"""Event helper utilities.

Quick import:
    from agro.events.event_helpers import (
        publish_rain_alert, publish_wind_alert, publish_vegetable_image
    )
"""
from __future__ import annotations
from typing import Any, Optional

from .Event_Bus import (
    GLOBAL_EVENT_BUS,
    VEGETABLE_IMAGE_FAILED,
    VEGETABLE_IMAGE_READY,
    WEATHER_ALERT_RAIN,
    WEATHER_ALERT_WIND,
)

__all__ = [
    'publish_rain_alert', 'publish_wind_alert', 'publish_vegetable_image',
    'WEATHER_ALERT_RAIN', 'WEATHER_ALERT_WIND', 'VEGETABLE_IMAGE_READY', 'VEGETABLE_IMAGE_FAILED',
]


def publish_rain_alert(title: str, body: str, rain_chance, day: str, bus=GLOBAL_EVENT_BUS):
    """Publish a weather.alert_rain event."""
    bus.publish(WEATHER_ALERT_RAIN, {
        'title': title,
        'body': body,
        'tag': 'weather-alert-rain',
        'rain_chance': rain_chance,
        'date': day,
    })


def publish_wind_alert(title: str, body: str, wind, day: str, bus=GLOBAL_EVENT_BUS):
    """Publish a weather.alert_wind event."""
    bus.publish(WEATHER_ALERT_WIND, {
        'title': title,
        'body': body,
        'tag': 'weather-alert-wind',
        'wind': wind,
        'date': day,
    })


def publish_vegetable_image(vegetable: Any, temp_id: int, error: Optional[str] = None, bus=GLOBAL_EVENT_BUS):
    """Publish the outcome of an image generation for a vegetable.

    Payload structure:
        {'vegetable': Vegetable, 'temp_id': <int>[, 'error': <str>]}
    """
    if error is None:
        bus.publish(VEGETABLE_IMAGE_READY, {'vegetable': vegetable, 'temp_id': temp_id})
    else:
        bus.publish(VEGETABLE_IMAGE_FAILED, {'vegetable': vegetable, 'temp_id': temp_id, 'error': error})
