"""Vegetable domain: planted crops and the catalog that tracks their generated images.

A new vegetable is inserted with a negative temporary id and an ``ImagePending``
state; when its image generation completes the entry is located again by that
temporary id (never by position) and receives its final id and image.
"""
import asyncio
import itertools
from enum import Enum
from typing import List, Optional, Union

from agro.events.event_helpers import publish_vegetable_image
from agro.events.Event_Bus import GLOBAL_EVENT_BUS


class VegetableStatus(str, Enum):
    SEEDLING = "Seedling"
    GROWING = "Growing"
    FLOWERING = "Flowering"
    HARVESTABLE = "Harvestable"


class ImagePending:
    state = "pending"
    url = ""

    def __init__(self, temp_id: int):
        self.temp_id = temp_id


class ImageReady:
    state = "ready"

    def __init__(self, url: str):
        self.url = url


class ImageFailed:
    state = "failed"

    def __init__(self, url: str, error: str = ""):
        self.url = url
        self.error = error


ImageState = Union[ImagePending, ImageReady, ImageFailed]


class Vegetable:
    def __init__(self, id: int, name: str, planting_date: str,
                 status: VegetableStatus = VegetableStatus.SEEDLING, image: Optional[ImageState] = None):
        self.id = id
        self.name = name
        self.planting_date = planting_date
        self.status = VegetableStatus(status)
        self.image: ImageState = image if image is not None else ImageReady("")

    @property
    def image_url(self) -> str:
        return self.image.url

    @property
    def image_loading(self) -> bool:
        return isinstance(self.image, ImagePending)

    def __str__(self) -> str:
        return f"{self.name} ({self.status.value}, planted {self.planting_date})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Vegetable(
            id=int(d["id"]),
            name=d.get("name", ""),
            planting_date=d.get("planting_date", ""),
            status=d.get("status", VegetableStatus.SEEDLING),
            image=ImageReady(d.get("image_url", "")),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "planting_date": self.planting_date,
            "status": self.status.value,
            "image_url": self.image_url,
            "image_loading": self.image_loading,
            "image_state": self.image.state,
        }


class VegetableCatalog:
    def __init__(self, vegetables: Optional[List[Vegetable]] = None):
        self.vegetables: List[Vegetable] = list(vegetables) if vegetables else []
        self._temp_ids = itertools.count(-1, -1)
        self._event_bus = GLOBAL_EVENT_BUS
        self.closed = False
        self.lock = asyncio.Lock()

    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def get(self, vegetable_id: int) -> Optional[Vegetable]:
        for veg in self.vegetables:
            if veg.id == vegetable_id:
                return veg
        return None

    def add_placeholder(self, name: str, planting_date: str, status: VegetableStatus) -> Vegetable:
        '''
        Appends a vegetable whose image is still being generated.
        '''
        temp_id = next(self._temp_ids)
        veg = Vegetable(temp_id, name, planting_date, status, ImagePending(temp_id))
        self.vegetables.append(veg)
        return veg

    def resolve(self, temp_id: int, image: Union[ImageReady, ImageFailed]) -> Optional[Vegetable]:
        '''
        Attaches the final image to the placeholder ``temp_id`` and assigns its id.
        Returns None when the placeholder is gone or the catalog is closed.
        '''
        if self.closed:
            return None
        veg = self.get(temp_id)
        if veg is None or not isinstance(veg.image, ImagePending):
            return None
        veg.id = max([v.id for v in self.vegetables if v is not veg] + [0]) + 1
        veg.image = image
        error = image.error if isinstance(image, ImageFailed) else None
        publish_vegetable_image(veg, temp_id, error, bus=self._event_bus)
        return veg

    def remove(self, vegetable_id: int) -> None:
        self.vegetables = [v for v in self.vegetables if v.id != vegetable_id]

    def close(self) -> None:
        """Completions arriving after close are dropped."""
        self.closed = True

    def to_dict(self):
        return [v.to_dict() for v in self.vegetables]

    @staticmethod
    def from_dict(data):
        return VegetableCatalog([Vegetable.from_dict(d) for d in data or []])
