
from agro.api.context import AppContext
from agro.domain.Subscription import SubscriptionPlan
from agro.domain.User import User
from agro.infra.Seed_Repository import SeedRepository
from agro.infra.Session_Repository import SessionRepository


class FakeAI:
    """Stands in for OpenAIServices; records prompts and returns canned results."""

    def __init__(self, image_url="https://img.test/generated.png", fail=False):
        self.image_url = image_url
        self.fail = fail
        self.prompts = []

    async def generate_image(self, prompt):
        self.prompts.append(prompt)
        if self.fail:
            raise RuntimeError("image service down")
        return self.image_url

    async def diagnose_plant(self, content, mime):
        self.prompts.append(mime)
        return "Diagnosi: oidio sulle foglie. Rimedio: zolfo bagnabile."

    async def generate_layout(self, draft):
        return {"text": "Disponi i pomodori a nord.", "image": "data:image/png;base64,AAAA"}


def make_context(tmp_path, plan=None, ai=None, http_client=None):
    ctx = AppContext(SeedRepository(), SessionRepository(tmp_path / "session.json"),
                     ai=ai or FakeAI(), http_client=http_client)
    if plan is not None:
        user = User(id="u1", name="Mario", surname="Rossi", address="Via Roma 1, 00100 Roma (RM)",
                    email="mario@example.com", company="Azienda Agricola Rossi")
        ctx.session.start(user, SubscriptionPlan.parse(plan))
    return ctx
