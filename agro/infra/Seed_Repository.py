"""Static demo data shipped with the package (read-only JSON files)."""
import json
import logging
from datetime import date, timedelta

from agro.domain.CashBook import CashBook
from agro.domain.Community import CommunityBoard
from agro.domain.Garden import FarmingSystem, VegetableInfo
from agro.domain.HarvestLog import HarvestLog
from agro.domain.Marketplace import Marketplace
from agro.domain.Task import TaskList
from agro.domain.Vegetable import VegetableCatalog
from agro.infra.paths import CATALOG_FILE, COMMUNITY_FILE, FAQ_FILE, SEED_FILE

logger = logging.getLogger(__name__)


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class SeedRepository:
    """Builds fresh in-memory aggregates from the demo data files."""

    def __init__(self, seed_file=SEED_FILE, catalog_file=CATALOG_FILE,
                 community_file=COMMUNITY_FILE, faq_file=FAQ_FILE):
        self.seed = _read(seed_file)
        self.catalog = _read(catalog_file)
        self.community = _read(community_file)
        self.faq_file = faq_file

    def vegetables(self) -> VegetableCatalog:
        return VegetableCatalog.from_dict(self.seed.get("vegetables", []))

    def tasks(self, today: date = None) -> TaskList:
        '''
        Demo tasks; ``due_in_days`` is resolved relative to ``today``.
        '''
        today = today or date.today()
        rows = []
        for raw in self.seed.get("tasks", []):
            row = dict(raw)
            row["due_date"] = (today + timedelta(days=int(row.pop("due_in_days", 0)))).isoformat()
            rows.append(row)
        return TaskList.from_dict(rows)

    def cash_book(self) -> CashBook:
        return CashBook.from_dict({
            "transactions": self.seed.get("transactions", []),
            "contacts": self.seed.get("contacts", []),
        })

    def harvests(self) -> HarvestLog:
        return HarvestLog.from_dict(self.seed.get("harvests", []))

    def marketplace(self) -> Marketplace:
        return Marketplace.from_dict(self.seed.get("marketplace", []))

    def vegetable_database(self):
        return [VegetableInfo.from_dict(d) for d in self.catalog.get("vegetables", [])]

    def farming_systems(self):
        return [FarmingSystem.from_dict(d) for d in self.catalog.get("farming_systems", [])]

    def community_board(self) -> CommunityBoard:
        return CommunityBoard.from_dict(self.community)

    def faqs(self):
        try:
            return _read(self.faq_file)
        except FileNotFoundError:
            logger.warning("FAQ file %s missing", self.faq_file)
            return []
