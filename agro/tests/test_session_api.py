import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from agro.api.api_run import create_app
from agro.tests.helpers import make_context

REGISTRATION = {
    "name": "Anna",
    "surname": "Verdi",
    "street": "Via dei Campi 3",
    "city": "Latina",
    "province": "lt",
    "cap": "04100",
    "email": "anna@example.com",
    "company": "Orto Verdi",
}


class TestSessionAPI(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.ctx = make_context(Path(self.tmp.name))
        self.client = TestClient(create_app(self.ctx))

    def tearDown(self):
        self.tmp.cleanup()

    def _register(self, plan="Gratis"):
        resp = self.client.post('/api/register', json=dict(REGISTRATION, plan=plan))
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_logged_out_sees_nothing(self):
        data = self.client.get('/api/session').json()
        self.assertFalse(data['logged_in'])
        self.assertIsNone(data['plan'])
        self.assertEqual(self.client.get('/api/navigation').json()['items'], [])

        resp = self.client.get('/api/dashboard')
        self.assertEqual(resp.status_code, 403)
        detail = resp.json()['detail']
        self.assertEqual(detail['view'], 'Il mio Orto')
        self.assertEqual(detail['upgrade'], '/api/plans')

    def test_register_starts_session_and_persists_it(self):
        data = self._register("Pro")
        self.assertEqual(data['plan'], 'Pro')
        self.assertEqual(data['user']['address'], 'Via dei Campi 3, 04100 Latina (LT)')
        self.assertTrue(self.ctx.sessions.path.exists())

        session = self.client.get('/api/session').json()
        self.assertTrue(session['logged_in'])
        self.assertEqual(session['user']['email'], 'anna@example.com')

    def test_register_defaults_to_gratis(self):
        payload = dict(REGISTRATION)
        resp = self.client.post('/api/register', json=payload)
        self.assertEqual(resp.json()['plan'], 'Gratis')

    def test_register_validation_errors(self):
        resp = self.client.post('/api/register', json=dict(REGISTRATION, email='anna-at-example'))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['error'], 'Inserisci un indirizzo email valido.')

        resp = self.client.post('/api/register', json=dict(REGISTRATION, city=''))
        self.assertEqual(resp.json()['error'], 'Per favore, compila tutti i campi obbligatori.')

        resp = self.client.post('/api/register', json=dict(REGISTRATION, plan='Premium'))
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(self.ctx.session.is_active)

    def test_gating_follows_plan_changes(self):
        self._register("Gratis")
        self.assertEqual(self.client.get('/api/tasks').status_code, 200)
        resp = self.client.get('/api/harvests')
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()['detail']['required_plan'], 'Pro')

        resp = self.client.post('/api/plan', json={'plan': 'Business'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get('/api/harvests').status_code, 200)
        self.assertEqual(self.client.get('/api/cashflow').status_code, 200)
        names = [item['name'] for item in self.client.get('/api/navigation').json()['items']]
        self.assertIn('Entrate/Uscite', names)

    def test_plan_change_requires_user(self):
        resp = self.client.post('/api/plan', json={'plan': 'Pro'})
        self.assertEqual(resp.status_code, 401)

    def test_logout_clears_session_file(self):
        self._register("Business")
        resp = self.client.post('/api/logout')
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(self.ctx.sessions.path.exists())
        self.assertEqual(self.client.get('/api/faq').status_code, 403)

    def test_plans_and_faq(self):
        self._register("Pro")
        plans = self.client.get('/api/plans').json()
        self.assertEqual(plans['current'], 'Pro')
        self.assertEqual(len(plans['plans']), 3)

        faqs = self.client.get('/api/faq', params={'q': 'business'}).json()['faqs']
        self.assertEqual(len(faqs), 1)
        self.assertTrue(self.client.get('/api/faq').json()['faqs'])

    def test_notification_banner(self):
        self._register()
        self.assertTrue(self.client.get('/api/dashboard').json()['show_notification_banner'])
        resp = self.client.post('/api/notifications/permission', json={'permission': 'granted'})
        self.assertFalse(resp.json()['show_notification_banner'])
        resp = self.client.post('/api/notifications/permission', json={'permission': 'maybe'})
        self.assertEqual(resp.status_code, 400)

    def test_dashboard_limits_widgets(self):
        self._register()
        data = self.client.get('/api/dashboard').json()
        self.assertLessEqual(len(data['tasks']), 3)
        self.assertEqual(len(data['vegetables']), 4)
        self.assertIsNone(data['today'])

    def test_home_page(self):
        resp = self.client.get('/')
        self.assertEqual(resp.status_code, 200)
        self.assertIn('Benvenuto in AgroIO', resp.text)
        self._register()
        resp = self.client.get('/')
        self.assertIn('Ciao, Anna!', resp.text)
        self.assertIn('Check List', resp.text)


if __name__ == '__main__':
    unittest.main()
