from datetime import date
import unittest

from agro.domain.HarvestLog import HarvestLog
from agro.infra.Seed_Repository import SeedRepository
from agro.logic.reporting.harvests import monthly_harvest_chart
from agro.utilities.errors import ValidationFailed


class TestHarvestLog(unittest.TestCase):

    def setUp(self):
        seeds = SeedRepository()
        self.log = seeds.harvests()
        self.vegetables = seeds.vegetables().vegetables

    def test_seed_sorted_newest_first(self):
        self.assertEqual([h.date for h in self.log.harvests], ["2024-07-23", "2024-07-22", "2024-07-20"])

    def test_add_copies_vegetable_name(self):
        harvest = self.log.add_harvest(
            {"vegetable_id": 4, "date": "2024-07-25", "quantity": 3, "unit": "pezzi", "notes": ""},
            self.vegetables,
        )
        self.assertEqual(harvest.id, 4)
        self.assertEqual(harvest.vegetable_name, "Lattuga Romana")
        self.assertIsNone(harvest.notes)
        self.assertIs(self.log.harvests[0], harvest)

    def test_older_harvest_is_sorted_in(self):
        harvest = self.log.add_harvest({"vegetable_id": 1, "date": "2024-07-01", "quantity": 1.5}, self.vegetables)
        self.assertIs(self.log.harvests[-1], harvest)
        self.assertEqual(harvest.unit, "kg")

    def test_unknown_vegetable_rejected(self):
        with self.assertRaises(ValidationFailed) as ctx:
            self.log.add_harvest({"vegetable_id": 99, "date": "2024-07-25", "quantity": 1}, self.vegetables)
        self.assertEqual(str(ctx.exception), "Ortaggio non valido selezionato.")
        self.assertEqual(len(self.log.harvests), 3)

    def test_non_iso_date_rejected(self):
        with self.assertRaises(ValidationFailed):
            self.log.add_harvest({"vegetable_id": 1, "date": "25/07/2024", "quantity": 1}, self.vegetables)
        self.assertEqual(len(self.log.harvests), 3)

    def test_empty_log_starts_at_one(self):
        harvest = HarvestLog().add_harvest({"vegetable_id": 2, "date": "2024-07-25", "quantity": 2}, self.vegetables)
        self.assertEqual(harvest.id, 1)


class TestHarvestChart(unittest.TestCase):

    def setUp(self):
        self.harvests = SeedRepository().harvests().harvests

    def test_filters_by_unit(self):
        chart = monthly_harvest_chart(self.harvests, "kg", date(2024, 7, 31))
        self.assertEqual(len(chart["months"]), 12)
        self.assertTrue(chart["has_data"])
        self.assertEqual(chart["months"][-1]["total"], 5)
        self.assertEqual(chart["months"][-1]["height"], 1)
        self.assertEqual(chart["max_total"], 5)

        grams = monthly_harvest_chart(self.harvests, "g", date(2024, 7, 31))
        self.assertEqual(grams["months"][-1]["total"], 200)

    def test_no_data_in_window(self):
        chart = monthly_harvest_chart(self.harvests, "kg", date(2026, 1, 15))
        self.assertFalse(chart["has_data"])
        self.assertEqual(chart["max_total"], 1)
        self.assertTrue(all(m["height"] == 0 for m in chart["months"]))


if __name__ == '__main__':
    unittest.main()
