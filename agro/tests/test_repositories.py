from datetime import date, timedelta
import json
import unittest
import tempfile
from pathlib import Path

from agro.domain.Subscription import SubscriptionPlan
from agro.domain.User import User
from agro.infra.Seed_Repository import SeedRepository
from agro.infra.Session_Repository import SessionRepository
from agro.infra.pdf_utils import generate_cashflow_pdf


class TestSessionRepository(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.repo = SessionRepository(Path(self.tmp.name) / "session.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_means_logged_out(self):
        session = self.repo.load()
        self.assertFalse(session.is_active)

    def test_round_trip_keeps_user_and_plan_only(self):
        session = self.repo.load()
        session.start(User(id="u1", name="Anna", surname="Verdi", email="anna@example.com"), SubscriptionPlan.PRO)
        session.notification_permission = "granted"
        self.repo.save(session)

        restored = self.repo.load()
        self.assertTrue(restored.is_active)
        self.assertEqual(restored.plan, SubscriptionPlan.PRO)
        self.assertEqual(restored.user.full_name, "Anna Verdi")
        self.assertEqual(restored.notification_permission, "default")

    def test_corrupt_file_is_ignored(self):
        self.repo.path.write_text("{not json", encoding="utf-8")
        self.assertFalse(self.repo.load().is_active)

    def test_clear(self):
        self.repo.save(self.repo.load())
        self.repo.clear()
        self.assertFalse(self.repo.path.exists())


class TestSeedRepository(unittest.TestCase):

    def test_task_due_dates_relative_to_today(self):
        today = date(2024, 7, 15)
        tasks = SeedRepository().tasks(today)
        self.assertEqual(tasks.get(1).due_date, "2024-07-15")
        self.assertEqual(tasks.get(4).due_date, (today + timedelta(days=7)).isoformat())
        self.assertEqual([t.id for t in tasks.completed()], [5])

    def test_missing_faq_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            repo = SeedRepository(faq_file=Path(tmp) / "faq.json")
            self.assertEqual(repo.faqs(), [])

    def test_faq_file_shape(self):
        faqs = SeedRepository().faqs()
        self.assertTrue(faqs)
        self.assertTrue(all({"question", "answer"} <= set(f) for f in faqs))
        json.dumps(faqs)


class TestCashflowPdf(unittest.TestCase):

    def test_pdf_bytes(self):
        book = SeedRepository().cash_book()
        pdf = generate_cashflow_pdf(book.transactions, "Azienda Agricola Rossi", date(2024, 7, 20))
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_pdf_without_transactions(self):
        self.assertTrue(generate_cashflow_pdf([]).startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
