"""CashBook aggregate: income/expense transactions and the contact directory."""
from typing import List, Optional

from agro.utilities.constants import MSG_INVALID_DATE
from agro.utilities.errors import ValidationFailed
from agro.utilities.validators import is_iso_date


class Transaction:
    def __init__(self, id: int, date: str, description: str, amount: float, type: str,
                 category: str, contact_name: str, quantity: Optional[float] = None,
                 unit: Optional[str] = None):
        self.id = id
        self.date = date
        self.description = description
        self.amount = amount
        self.type = type
        self.category = category
        self.contact_name = contact_name
        self.quantity = quantity
        self.unit = unit

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    def __str__(self) -> str:
        sign = "+" if self.is_income else "-"
        return f"{self.date} {self.description} {sign}{self.amount:.2f} ({self.contact_name})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Transaction(
            id=int(d["id"]),
            date=d.get("date", ""),
            description=d.get("description", ""),
            amount=float(d.get("amount", 0)),
            type=d.get("type", "income"),
            category=d.get("category", ""),
            contact_name=d.get("contact_name", ""),
            quantity=d.get("quantity"),
            unit=d.get("unit"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "category": self.category,
            "contact_name": self.contact_name,
            "quantity": self.quantity,
            "unit": self.unit,
        }


class Contact:
    def __init__(self, id: int, name: str, phone: Optional[str] = None, email: Optional[str] = None):
        self.id = id
        self.name = name
        self.phone = phone
        self.email = email

    def __str__(self) -> str:
        return f"{self.name} ({self.phone or '-'}, {self.email or '-'})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Contact(int(d["id"]), d.get("name", ""), d.get("phone"), d.get("email"))

    def to_dict(self):
        return {"id": self.id, "name": self.name, "phone": self.phone, "email": self.email}


class CashBook:
    def __init__(self, transactions: Optional[List[Transaction]] = None,
                 contacts: Optional[List[Contact]] = None):
        self.transactions: List[Transaction] = list(transactions) if transactions else []
        self.contacts: List[Contact] = list(contacts) if contacts else []
        self._sort()

    def _sort(self):
        # stable: equal dates keep insertion order
        self.transactions.sort(key=lambda t: t.date, reverse=True)

    def find_contact(self, name: str) -> Optional[Contact]:
        '''
        Case-insensitive lookup in the directory.
        '''
        key = (name or "").strip().lower()
        for contact in self.contacts:
            if contact.name.lower() == key:
                return contact
        return None

    def is_new_contact(self, name: str) -> bool:
        return bool(name and name.strip()) and self.find_contact(name) is None

    def add_transaction(self, draft: dict, new_contact: Optional[dict] = None) -> Transaction:
        '''
        Records a transaction and optionally upserts the counterpart contact.

        draft: dict with date, description, amount, type, category, contact_name[, quantity, unit]
        new_contact: dict with name[, phone, email]; merged on an existing name
                     (case-insensitive) only where the new values are non-empty.
        '''
        if not draft.get("description") or not draft.get("contact_name"):
            raise ValidationFailed("Descrizione, importo e contatto sono obbligatori.")
        if not is_iso_date(draft.get("date")):
            raise ValidationFailed(MSG_INVALID_DATE)
        next_id = max([t.id for t in self.transactions] + [0]) + 1
        quantity = draft.get("quantity")
        tx = Transaction(
            id=next_id,
            date=draft["date"],
            description=draft["description"],
            amount=float(draft["amount"]),
            type=draft["type"],
            category=draft.get("category") or "",
            contact_name=draft["contact_name"],
            quantity=quantity,
            unit=draft.get("unit") if quantity else None,
        )
        self.transactions.insert(0, tx)
        self._sort()
        if new_contact:
            self.upsert_contact(new_contact)
        return tx

    def upsert_contact(self, data: dict) -> Contact:
        existing = self.find_contact(data.get("name", ""))
        if existing is None:
            contact = Contact(
                id=max([c.id for c in self.contacts] + [0]) + 1,
                name=data["name"].strip(),
                phone=data.get("phone") or None,
                email=data.get("email") or None,
            )
            self.contacts.append(contact)
            return contact
        existing.phone = data.get("phone") or existing.phone
        existing.email = data.get("email") or existing.email
        return existing

    def contact_map(self):
        '''
        Exact-name index of the directory.
        '''
        return {c.name: c for c in self.contacts}

    def to_dict(self):
        return {
            "transactions": [t.to_dict() for t in self.transactions],
            "contacts": [c.to_dict() for c in self.contacts],
        }

    @staticmethod
    def from_dict(data):
        d = dict(data or {})
        return CashBook(
            [Transaction.from_dict(t) for t in d.get("transactions", [])],
            [Contact.from_dict(c) for c in d.get("contacts", [])],
        )
