import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agro.api.api_run import create_app
from agro.tests.helpers import FakeAI, make_context


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest_asyncio.fixture
async def business_client(tmp_path, fake_ai):
    app = create_app(make_context(tmp_path, "Business", ai=fake_ai))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac, app.state.context
