"""Marketplace: second-hand equipment and produce listings, newest first."""
from typing import List, Optional


class MarketplaceItem:
    def __init__(self, id: int, type: str, name: str, description: str, price: float,
                 image_url: str, seller: str, location: str, condition: Optional[str] = None):
        self.id = id
        self.type = type
        self.name = name
        self.description = description
        self.price = price
        self.image_url = image_url
        self.seller = seller
        self.location = location
        self.condition = condition

    def __str__(self) -> str:
        return f"{self.name} - € {self.price:.2f} ({self.location})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return MarketplaceItem(
            id=int(d["id"]),
            type=d.get("type", "equipment"),
            name=d.get("name", ""),
            description=d.get("description", ""),
            price=float(d.get("price", 0)),
            image_url=d.get("image_url", ""),
            seller=d.get("seller", ""),
            location=d.get("location", ""),
            condition=d.get("condition"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image_url": self.image_url,
            "seller": self.seller,
            "location": self.location,
            "condition": self.condition,
        }


class Marketplace:
    def __init__(self, items: Optional[List[MarketplaceItem]] = None):
        self.items: List[MarketplaceItem] = list(items) if items else []

    def add_item(self, draft: dict) -> MarketplaceItem:
        item = MarketplaceItem(id=max([i.id for i in self.items] + [0]) + 1, **draft)
        self.items.insert(0, item)
        return item

    def search(self, type: Optional[str] = None, query: str = "") -> List[MarketplaceItem]:
        '''
        Items of ``type`` (all when None) whose name contains ``query``, case-insensitive.
        '''
        q = (query or "").strip().lower()
        return [
            i for i in self.items
            if (type is None or i.type == type) and q in i.name.lower()
        ]

    @staticmethod
    def from_dict(data):
        return Marketplace([MarketplaceItem.from_dict(d) for d in data or []])
