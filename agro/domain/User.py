"""User domain entity: the registered farmer."""
from typing import Optional

from agro.utilities.config import FALLBACK_LAT, FALLBACK_LNG


class User:
    def __init__(self, id: str = "", name: str = "", surname: str = "", address: str = "", email: str = "",
                 lat: float = FALLBACK_LAT, lng: float = FALLBACK_LNG, company: Optional[str] = None,
                 specialization: Optional[str] = None, website: Optional[str] = None):
        self.id = id
        self.name = name
        self.surname = surname
        self.address = address
        self.email = email
        self.lat = lat
        self.lng = lng
        self.company = company
        self.specialization = specialization
        self.website = website

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a User from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "name", "surname", "address", "email", "lat", "lng",
                   "company", "specialization", "website"}
        return User(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "surname": self.surname,
            "address": self.address,
            "email": self.email,
            "lat": self.lat,
            "lng": self.lng,
            "company": self.company,
            "specialization": self.specialization,
            "website": self.website,
        }
