"""Garden design: reference catalogs and the 7-step wizard state machine.

Steps:
  1 farming system      (select, auto-advance)
  2 cultivation type    (select, auto-advance)
  3 sun exposure        (select, auto-advance)
  4 plants              (at least one to continue)
  5 dimensions          (width and length to continue)
  6 photo of the area   (optional)
  7 summary and layout  (terminal; start over resets)
"""
from typing import Dict, List, Optional

from agro.utilities.constants import (
    CULTIVATION_TYPES,
    SUN_EXPOSURES,
    WIZARD_FIRST_STEP,
    WIZARD_LAST_STEP,
)
from agro.utilities.errors import WizardError


class VegetableInfo:
    def __init__(self, name: str, family: str = "", exposure: str = "", watering: str = "",
                 spacing: Optional[Dict[str, int]] = None, sowing: str = "", harvest: str = "",
                 companions: str = "", avoid: str = "", yield_: str = ""):
        self.name = name
        self.family = family
        self.exposure = exposure
        self.watering = watering
        self.spacing = dict(spacing or {"plants": 0, "rows": 0})
        self.sowing = sowing
        self.harvest = harvest
        self.companions = companions
        self.avoid = avoid
        self.yield_ = yield_

    def __repr__(self) -> str:
        return f"VegetableInfo({self.name!r})"

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return VegetableInfo(
            name=d["name"],
            family=d.get("family", ""),
            exposure=d.get("exposure", ""),
            watering=d.get("watering", ""),
            spacing=d.get("spacing"),
            sowing=d.get("sowing", ""),
            harvest=d.get("harvest", ""),
            companions=d.get("companions", ""),
            avoid=d.get("avoid", ""),
            yield_=d.get("yield", ""),
        )

    def to_dict(self):
        return {
            "name": self.name,
            "family": self.family,
            "exposure": self.exposure,
            "watering": self.watering,
            "spacing": dict(self.spacing),
            "sowing": self.sowing,
            "harvest": self.harvest,
            "companions": self.companions,
            "avoid": self.avoid,
            "yield": self.yield_,
        }


class FarmingSystem:
    def __init__(self, name: str, description: str, advantages: List[str], disadvantages: List[str]):
        self.name = name
        self.description = description
        self.advantages = list(advantages)
        self.disadvantages = list(disadvantages)

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return FarmingSystem(d["name"], d.get("description", ""),
                             d.get("advantages", []), d.get("disadvantages", []))

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "advantages": list(self.advantages),
            "disadvantages": list(self.disadvantages),
        }


class GardenDraft:
    """Everything collected by the wizard so far."""

    def __init__(self):
        self.farming_system: Optional[FarmingSystem] = None
        self.cultivation_type: Optional[str] = None
        self.sun_exposure: Optional[str] = None
        self.selected_plants: List[VegetableInfo] = []
        self.width: Optional[float] = None
        self.length: Optional[float] = None
        self.photo: Optional[bytes] = None
        self.photo_mime: Optional[str] = None

    @property
    def has_dimensions(self) -> bool:
        return bool(self.width) and bool(self.length)

    def to_dict(self):
        return {
            "farming_system": self.farming_system.to_dict() if self.farming_system else None,
            "cultivation_type": self.cultivation_type,
            "sun_exposure": self.sun_exposure,
            "selected_plants": [p.name for p in self.selected_plants],
            "dimensions": {"width": self.width, "length": self.length},
            "has_photo": self.photo is not None,
        }


class GardenWizard:
    def __init__(self, farming_systems: List[FarmingSystem], plant_catalog: List[VegetableInfo]):
        self.farming_systems = list(farming_systems)
        self.plant_catalog = list(plant_catalog)
        self.step = WIZARD_FIRST_STEP
        self.draft = GardenDraft()

    def _expect_step(self, step: int):
        if self.step != step:
            raise WizardError(f"Operazione non disponibile al passo {self.step}.")

    # --- steps 1-3: select and advance -------------------------------------
    def choose_farming_system(self, name: str):
        self._expect_step(1)
        system = next((s for s in self.farming_systems if s.name == name), None)
        if system is None:
            raise WizardError("Sistema agricolo non valido.")
        self.draft.farming_system = system
        self.step = 2

    def choose_cultivation_type(self, value: str):
        self._expect_step(2)
        if value not in CULTIVATION_TYPES:
            raise WizardError("Tipo di coltivazione non valido.")
        self.draft.cultivation_type = value
        self.step = 3

    def choose_sun_exposure(self, value: str):
        self._expect_step(3)
        if value not in SUN_EXPOSURES:
            raise WizardError("Esposizione solare non valida.")
        self.draft.sun_exposure = value
        self.step = 4

    # --- step 4 ------------------------------------------------------------
    def add_plant(self, name: str):
        self._expect_step(4)
        info = next((p for p in self.plant_catalog if p.name == name), None)
        if info is None:
            raise WizardError("Pianta non presente nel catalogo.")
        if all(p.name != name for p in self.draft.selected_plants):
            self.draft.selected_plants.append(info)

    def remove_plant(self, name: str):
        self._expect_step(4)
        self.draft.selected_plants = [p for p in self.draft.selected_plants if p.name != name]

    # --- step 5-6 ----------------------------------------------------------
    def set_dimensions(self, width: Optional[float], length: Optional[float]):
        self._expect_step(5)
        self.draft.width = width
        self.draft.length = length

    def set_photo(self, content: bytes, mime: str):
        self._expect_step(6)
        self.draft.photo = content
        self.draft.photo_mime = mime

    # --- navigation --------------------------------------------------------
    def can_advance(self) -> bool:
        d = self.draft
        return {
            1: d.farming_system is not None,
            2: d.cultivation_type is not None,
            3: d.sun_exposure is not None,
            4: len(d.selected_plants) > 0,
            5: d.has_dimensions,
            6: True,
            7: False,
        }[self.step]

    def next(self):
        if not self.can_advance():
            raise WizardError("Completa il passo corrente prima di continuare.")
        self.step = min(self.step + 1, WIZARD_LAST_STEP)

    def back(self):
        self.step = max(self.step - 1, WIZARD_FIRST_STEP)

    def start_over(self):
        self.step = WIZARD_FIRST_STEP
        self.draft = GardenDraft()

    @property
    def is_complete(self) -> bool:
        return self.step == WIZARD_LAST_STEP

    def to_dict(self):
        return {
            "step": self.step,
            "can_advance": self.can_advance(),
            "draft": self.draft.to_dict(),
        }
