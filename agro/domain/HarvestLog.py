"""HarvestLog aggregate: what was picked, when and how much."""
from typing import List, Optional

from agro.utilities.constants import MSG_INVALID_DATE
from agro.utilities.errors import ValidationFailed
from agro.utilities.validators import is_iso_date


class Harvest:
    def __init__(self, id: int, vegetable_id: int, vegetable_name: str, date: str,
                 quantity: float, unit: str, notes: Optional[str] = None):
        self.id = id
        self.vegetable_id = vegetable_id
        self.vegetable_name = vegetable_name
        self.date = date
        self.quantity = quantity
        self.unit = unit
        self.notes = notes

    def __str__(self) -> str:
        return f"{self.date} {self.vegetable_name}: {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Harvest(
            id=int(d["id"]),
            vegetable_id=int(d.get("vegetable_id", 0)),
            vegetable_name=d.get("vegetable_name", ""),
            date=d.get("date", ""),
            quantity=float(d.get("quantity", 0)),
            unit=d.get("unit", "kg"),
            notes=d.get("notes"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "vegetable_id": self.vegetable_id,
            "vegetable_name": self.vegetable_name,
            "date": self.date,
            "quantity": self.quantity,
            "unit": self.unit,
            "notes": self.notes,
        }


class HarvestLog:
    def __init__(self, harvests: Optional[List[Harvest]] = None):
        self.harvests: List[Harvest] = list(harvests) if harvests else []
        self.harvests.sort(key=lambda h: h.date, reverse=True)

    def add_harvest(self, draft: dict, vegetables) -> Harvest:
        '''
        Records a harvest of one of ``vegetables`` (the current crop list).
        The vegetable name is copied from the matching crop.
        '''
        vegetable = next((v for v in vegetables if v.id == draft.get("vegetable_id")), None)
        if vegetable is None:
            raise ValidationFailed("Ortaggio non valido selezionato.")
        if not is_iso_date(draft.get("date")):
            raise ValidationFailed(MSG_INVALID_DATE)
        harvest = Harvest(
            id=max([h.id for h in self.harvests] + [0]) + 1,
            vegetable_id=vegetable.id,
            vegetable_name=vegetable.name,
            date=draft["date"],
            quantity=float(draft["quantity"]),
            unit=draft.get("unit", "kg"),
            notes=draft.get("notes") or None,
        )
        self.harvests.insert(0, harvest)
        self.harvests.sort(key=lambda h: h.date, reverse=True)
        return harvest

    def to_dict(self):
        return [h.to_dict() for h in self.harvests]

    @staticmethod
    def from_dict(data):
        return HarvestLog([Harvest.from_dict(d) for d in data or []])
