"""
Input validation schemas using Pydantic.

Every form runs its checks in display order and raises ValueError with the
message shown to the farmer; ``first_error_message`` extracts it.
"""
import math
import re
from datetime import date, datetime
from typing import ClassVar, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from agro.utilities.constants import (
    DEFAULT_EXPENSE_CATEGORY,
    DEFAULT_INCOME_CATEGORY,
    DEFAULT_SELLER,
    DEFAULT_UNIT_LABEL,
    HARVEST_UNITS,
    MARKET_CONDITIONS,
    MSG_INVALID_DATE,
)
from agro.utilities.config import DATE_FORMAT
from agro.utilities.errors import ValidationFailed

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")


def first_error_message(err: ValidationError, fallback: str = "Dati non validi.") -> str:
    """Return the display message of the first validation error."""
    errors = err.errors()
    if not errors:
        return fallback
    first = errors[0]
    ctx_error = (first.get("ctx") or {}).get("error")
    if first.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    return fallback


def _today() -> str:
    return date.today().isoformat()


def _blank(v) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


def is_iso_date(v) -> bool:
    """True for zero-padded YYYY-MM-DD dates, whose string order is date order."""
    try:
        return datetime.strptime(v, DATE_FORMAT).strftime(DATE_FORMAT) == v
    except (TypeError, ValueError):
        return False


def _iso_date(v):
    if not is_iso_date(v):
        raise ValueError(MSG_INVALID_DATE)
    return v


class _Form(BaseModel):
    invalid_message: ClassVar[str] = "Dati non validi."

    @field_validator("*", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def parse(cls, data: dict):
        """Validate ``data``; raises ValidationFailed with the display message."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValidationFailed(first_error_message(e, cls.invalid_message)) from e


class TransactionForm(_Form):
    """Schema for a new cash-flow transaction plus optional contact details."""
    invalid_message: ClassVar[str] = "L'importo deve essere un numero positivo."

    type: Literal["income", "expense"] = "income"
    date: str = Field(default_factory=_today)
    description: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    contact_name: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[Literal["kg", "l", "unità"]] = DEFAULT_UNIT_LABEL
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def default_category(cls, data):
        if isinstance(data, dict) and data.get("category") is None:
            data = dict(data)
            kind = data.get("type") or "income"
            data["category"] = DEFAULT_INCOME_CATEGORY if kind == "income" else DEFAULT_EXPENSE_CATEGORY
        return data

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        if _blank(v):
            return _today()
        return _iso_date(v)

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_fields(self):
        if (_blank(self.description) or self.amount is None
                or _blank(self.category) or _blank(self.contact_name)):
            raise ValueError("Descrizione, importo e contatto sono obbligatori.")
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise ValueError("L'importo deve essere un numero positivo.")
        if self.quantity is not None and (not math.isfinite(self.quantity) or self.quantity < 0):
            raise ValueError("La quantità deve essere un numero positivo.")
        if not self.quantity:
            self.unit = None
        elif self.unit is None:
            self.unit = DEFAULT_UNIT_LABEL
        return self


class HarvestForm(_Form):
    """Schema for logging a harvest."""
    invalid_message: ClassVar[str] = "La quantità deve essere un numero positivo."

    vegetable_id: Optional[int] = None
    date: Optional[str] = None
    quantity: Optional[float] = None
    unit: Literal["kg", "g", "pezzi"] = HARVEST_UNITS[0]
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        if _blank(v):
            return v
        return _iso_date(v)

    @model_validator(mode="after")
    def check_fields(self):
        if self.vegetable_id is None or _blank(self.date) or self.quantity is None:
            raise ValueError("Ortaggio, data e quantità sono campi obbligatori.")
        if not math.isfinite(self.quantity) or self.quantity <= 0:
            raise ValueError("La quantità deve essere un numero positivo.")
        return self


class VegetableForm(_Form):
    name: Optional[str] = Field(None, validate_default=True)
    planting_date: str = Field(default_factory=_today)
    status: Literal["Seedling", "Growing", "Flowering", "Harvestable"] = "Seedling"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if _blank(v):
            raise ValueError("Il nome è obbligatorio.")
        return v


class TaskForm(_Form):
    title: Optional[str] = Field(None, validate_default=True)
    due_date: str = Field(default_factory=_today)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if _blank(v):
            raise ValueError("Il titolo è obbligatorio.")
        return v


class MarketplaceItemForm(_Form):
    """Schema for a marketplace listing."""
    invalid_message: ClassVar[str] = "Tutti i campi sono obbligatori."

    type: Literal["equipment", "produce"] = "equipment"
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    seller: str = DEFAULT_SELLER
    condition: Optional[Literal["Come Nuovo", "Buono Stato", "Da Revisionare"]] = MARKET_CONDITIONS[1]

    @model_validator(mode="after")
    def check_fields(self):
        if any(_blank(v) for v in (self.name, self.description, self.image_url, self.location)) \
                or self.price is None or not math.isfinite(self.price) or self.price <= 0:
            raise ValueError("Tutti i campi sono obbligatori.")
        if self.type == "produce":
            self.condition = None
        return self


class RegistrationForm(_Form):
    """Schema for the registration form; ``address`` is composed from its parts."""
    invalid_message: ClassVar[str] = "Per favore, compila tutti i campi obbligatori."

    name: Optional[str] = None
    surname: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    cap: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    specialization: Optional[str] = None
    website: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self):
        required = (self.name, self.surname, self.street, self.city, self.province, self.cap, self.email)
        if any(_blank(v) for v in required):
            raise ValueError("Per favore, compila tutti i campi obbligatori.")
        if not EMAIL_RE.match(self.email):
            raise ValueError("Inserisci un indirizzo email valido.")
        return self

    @property
    def address(self) -> str:
        return f"{self.street}, {self.cap} {self.city} ({self.province.upper()})"


class CatalogContributionForm(_Form):
    """A vegetable proposed by a community member for the reference catalog."""
    invalid_message: ClassVar[str] = "Compila tutti i campi della scheda."

    name: str = Field(..., min_length=1)
    family: str = ""
    exposure: str = ""
    watering: str = ""
    plants: int = Field(0, ge=0)
    rows: int = Field(0, ge=0)
    sowing: str = ""
    harvest: str = ""
    companions: str = ""
    avoid: str = ""
    yield_: str = Field("", alias="yield")

    def describe(self) -> str:
        return (
            f"Nome: {self.name}, Famiglia: {self.family}, Esposizione: {self.exposure}, "
            f"Irrigazione: {self.watering}, Distanza piante: {self.plants} cm, "
            f"Distanza file: {self.rows} cm, Semina: {self.sowing}, Raccolta: {self.harvest}, "
            f"Consociazioni: {self.companions}, Da evitare: {self.avoid}, Resa: {self.yield_}"
        )


class GardenDimensionsInput(BaseModel):
    width: Optional[float] = Field(None, ge=0)
    length: Optional[float] = Field(None, ge=0)


class PlantSelectionInput(BaseModel):
    names: List[str] = Field(default_factory=list)
