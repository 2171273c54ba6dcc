"""Weather domain: one forecast day and the location it was fetched for."""
from enum import Enum
from typing import Optional


class WeatherCondition(str, Enum):
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAIN = "Rain"
    WINDY = "Windy"


class WeatherDay:
    def __init__(self, day: str, temp: int, temp_min: int, condition: WeatherCondition,
                 wind: int, humidity: int, rain_chance: float, date: str = ""):
        self.day = day
        self.temp = temp
        self.temp_min = temp_min
        self.condition = WeatherCondition(condition)
        self.wind = wind
        self.humidity = humidity
        self.rain_chance = rain_chance
        self.date = date

    def __str__(self) -> str:
        return f"{self.day}: {self.condition.value} {self.temp_min}-{self.temp}°C, wind {self.wind} km/h, rain {self.rain_chance}%"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return WeatherDay(
            day=d.get("day", ""),
            temp=d.get("temp", 0),
            temp_min=d.get("temp_min", 0),
            condition=d.get("condition", WeatherCondition.CLOUDY),
            wind=d.get("wind", 0),
            humidity=d.get("humidity", 0),
            rain_chance=d.get("rain_chance", 0),
            date=d.get("date", ""),
        )

    def to_dict(self):
        return {
            "day": self.day,
            "date": self.date,
            "temp": self.temp,
            "temp_min": self.temp_min,
            "condition": self.condition.value,
            "wind": self.wind,
            "humidity": self.humidity,
            "rain_chance": self.rain_chance,
        }


class Location:
    """Coordinates used for the forecast; ``notice`` is set when the fallback was used."""

    def __init__(self, lat: float, lng: float, notice: Optional[str] = None):
        self.lat = lat
        self.lng = lng
        self.notice = notice

    @property
    def is_fallback(self) -> bool:
        return self.notice is not None

    def to_dict(self):
        return {"lat": self.lat, "lng": self.lng, "notice": self.notice}
