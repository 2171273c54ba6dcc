import httpx
import pytest

from agro.tests.helpers import FakeAI
from agro.utilities.constants import MSG_MARKET_IMAGE_FAILED, MSG_MARKET_NAME_FIRST

FORECAST = {
    "daily": {
        "time": ["2024-07-15", "2024-07-16", "2024-07-17"],
        "weather_code": [61, 0, 0],
        "temperature_2m_max": [24.0, 28.0, 29.0],
        "temperature_2m_min": [16.0, 17.0, 18.0],
        "wind_speed_10m_max": [12.0, 10.0, 8.0],
        "relative_humidity_2m_mean": [80.0, 55.0, 50.0],
        "precipitation_probability_max": [85, 5, 10],
    }
}


@pytest.mark.asyncio
async def test_cashflow_overview(business_client):
    client, _ = business_client
    resp = await client.get("/api/cashflow")
    assert resp.status_code == 200
    data = resp.json()
    assert data["totals"]["income"] == pytest.approx(290.2)
    assert [c["name"] for c in data["suppliers"]] == ["Forniture Verdi S.r.l."]
    assert len(data["performance"]["months"]) == 6


@pytest.mark.asyncio
async def test_add_transaction_with_new_contact(business_client):
    client, ctx = business_client
    check = await client.get("/api/cashflow/contacts/check", params={"name": "Bottega Verde"})
    assert check.json()["is_new"] is True

    resp = await client.post("/api/cashflow/transactions", json={
        "type": "income",
        "date": "2024-07-18",
        "description": "Vendita fragole",
        "amount": 40,
        "contact_name": "Bottega Verde",
        "quantity": 8,
        "unit": "kg",
        "contact_phone": "0611223344",
    })
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["new_contact"] is True
    assert body["transaction"]["id"] == 7
    assert body["transaction"]["category"] == "Vendita"
    assert ctx.cash_book.find_contact("bottega verde").phone == "0611223344"

    again = await client.post("/api/cashflow/transactions", json={
        "type": "income", "date": "2024-07-19", "description": "Vendita fragole",
        "amount": 20, "contact_name": "BOTTEGA VERDE",
    })
    assert again.json()["new_contact"] is False
    assert len(ctx.cash_book.contacts) == 4


@pytest.mark.asyncio
async def test_invalid_transaction_is_rejected(business_client):
    client, ctx = business_client
    resp = await client.post("/api/cashflow/transactions", json={
        "type": "expense", "description": "Sementi", "amount": -5, "contact_name": "Vivaio",
    })
    assert resp.status_code == 400
    assert resp.json() == {"error": "L'importo deve essere un numero positivo."}
    assert len(ctx.cash_book.transactions) == 6


@pytest.mark.asyncio
async def test_products_agenda_and_report(business_client):
    client, _ = business_client
    products = (await client.get("/api/cashflow/products", params={"type": "income"})).json()["products"]
    assert products[0]["product_name"] == "Vendita pomodori"

    detail = (await client.get("/api/cashflow/products/Vendita pomodori")).json()
    assert detail["transactions"][0]["contact_name"] == "Mercato Agricolo Locale"
    assert len(detail["months"]) == 12

    agenda = (await client.get("/api/cashflow/agenda", params={"search": "rossi"})).json()["contacts"]
    assert [a["name"] for a in agenda] == ["Idraulica Rossi"]

    resp = await client.get("/api/cashflow/report.pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_vegetable_added_with_generated_image(business_client, fake_ai):
    client, ctx = business_client
    resp = await client.post("/api/vegetables", json={"name": "Peperone", "status": "Growing"})
    assert resp.status_code == 202
    placeholder = resp.json()["vegetable"]
    assert placeholder["id"] < 0
    assert placeholder["image_loading"] is True

    vegetables = (await client.get("/api/vegetables")).json()["vegetables"]
    added = vegetables[-1]
    assert added["name"] == "Peperone"
    assert added["id"] == 5
    assert added["image_url"] == fake_ai.image_url
    assert any("Peperone" in p for p in fake_ai.prompts)


@pytest.mark.asyncio
async def test_vegetable_requires_name(business_client):
    client, ctx = business_client
    resp = await client.post("/api/vegetables", json={"name": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Il nome è obbligatorio."
    assert len(ctx.vegetables.vegetables) == 4


@pytest.mark.asyncio
async def test_harvest_flow(business_client):
    client, _ = business_client
    bad = await client.post("/api/harvests", json={"vegetable_id": 42, "date": "2024-07-25", "quantity": 2})
    assert bad.status_code == 400
    assert bad.json()["error"] == "Ortaggio non valido selezionato."

    ok = await client.post("/api/harvests", json={"vegetable_id": 1, "date": "2024-07-25", "quantity": 2})
    assert ok.status_code == 200
    assert ok.json()["harvest"]["vegetable_name"] == "Pomodoro San Marzano"

    data = (await client.get("/api/harvests", params={"unit": "pezzi"})).json()
    assert data["chart"]["unit"] == "pezzi"
    assert data["harvests"][0]["date"] == "2024-07-25"


@pytest.mark.asyncio
async def test_checklist_crud(business_client):
    client, _ = business_client
    created = (await client.post("/api/tasks", json={"title": "Pacciamare", "due_date": "2099-01-01"})).json()["task"]
    assert created["category"] == "General"
    assert created["id"] == 6

    toggled = (await client.post(f"/api/tasks/{created['id']}/toggle")).json()
    assert toggled["completed"] is True

    updated = await client.put(f"/api/tasks/{created['id']}", json={"title": "Pacciamare le fragole"})
    assert updated.json()["task"]["title"] == "Pacciamare le fragole"

    assert (await client.delete(f"/api/tasks/{created['id']}")).status_code == 200
    assert (await client.delete(f"/api/tasks/{created['id']}")).status_code == 404

    missing_title = await client.post("/api/tasks", json={})
    assert missing_title.json()["error"] == "Il titolo è obbligatorio."


@pytest.mark.asyncio
async def test_weather_refresh_updates_suggestions(business_client):
    client, ctx = business_client
    ctx.http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=FORECAST)))
    try:
        resp = await client.get("/api/weather", params={"geo": "denied"})
    finally:
        await ctx.http_client.aclose()
    assert resp.status_code == 200
    data = resp.json()
    assert data["notice"].startswith("Geolocalizzazione non riuscita")
    assert [d["condition"] for d in data["days"]] == ["Rain", "Sunny", "Sunny"]
    assert "Pioggia in arrivo" in [s["title"] for s in data["suggestions"]]

    tasks = (await client.get("/api/tasks")).json()
    assert tasks["suggestions"] == data["suggestions"]


@pytest.mark.asyncio
async def test_weather_failure_is_retryable(business_client):
    client, ctx = business_client
    ctx.http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    try:
        resp = await client.get("/api/weather", params={"lat": 45.0, "lon": 9.0})
    finally:
        await ctx.http_client.aclose()
    assert resp.status_code == 502
    assert resp.json()["retry"] is True
    assert ctx.weather == []


@pytest.mark.asyncio
async def test_marketplace(business_client):
    client, ctx = business_client
    equipment = (await client.get("/api/marketplace", params={"type": "equipment"})).json()["items"]
    assert {i["type"] for i in equipment} == {"equipment"}
    found = (await client.get("/api/marketplace", params={"q": "miele"})).json()["items"]
    assert [i["name"] for i in found] == ["Miele millefiori"]

    no_name = await client.post("/api/marketplace/image", json={"name": " "})
    assert no_name.status_code == 400
    assert no_name.json()["error"] == MSG_MARKET_NAME_FIRST

    image = await client.post("/api/marketplace/image", json={"name": "Trattorino", "description": "Usato"})
    assert image.json()["image_url"] == "https://img.test/generated.png"

    created = await client.post("/api/marketplace", json={
        "type": "equipment", "name": "Trattorino", "description": "Usato poco", "price": 900,
        "image_url": image.json()["image_url"], "location": "Viterbo", "condition": "Come Nuovo",
    })
    assert created.status_code == 200
    assert created.json()["item"]["id"] == 5
    assert ctx.marketplace.items[0].name == "Trattorino"

    ctx.ai = FakeAI(fail=True)
    failed = await client.post("/api/marketplace/image", json={"name": "Erpice"})
    assert failed.status_code == 502
    assert failed.json()["error"] == MSG_MARKET_IMAGE_FAILED


@pytest.mark.asyncio
async def test_garden_wizard_flow(business_client):
    client, _ = business_client
    early = await client.post("/api/garden/layout")
    assert early.status_code == 400

    state = (await client.get("/api/garden")).json()
    assert state["step"] == 1
    assert len(state["farming_systems"]) == 3

    await client.post("/api/garden/farming-system", json={"name": "Agricoltura Biologica"})
    await client.post("/api/garden/cultivation-type", json={"value": "Serra"})
    state = (await client.post("/api/garden/sun-exposure", json={"value": "Pieno Sole"})).json()
    assert state["step"] == 4

    stuck = await client.post("/api/garden/next")
    assert stuck.status_code == 400

    await client.post("/api/garden/plants", json={"names": ["Pomodoro", "Basilico"]})
    await client.post("/api/garden/next")
    await client.post("/api/garden/dimensions", json={"width": 10, "length": 5})
    await client.post("/api/garden/next")
    photo = await client.post("/api/garden/photo", files={"photo": ("orto.jpg", b"\xff\xd8fake", "image/jpeg")})
    assert photo.json()["draft"]["has_photo"] is True
    state = (await client.post("/api/garden/next")).json()
    assert state["step"] == 7
    assert [p["quantity"] for p in state["plants"]] == [89, 416]

    layout = (await client.post("/api/garden/layout")).json()
    assert layout["layout"]["text"] == "Disponi i pomodori a nord."


@pytest.mark.asyncio
async def test_ai_features(business_client):
    client, _ = business_client
    diagnosis = await client.post("/api/gardener/diagnose",
                                  files={"image": ("foglia.png", b"\x89PNGfake", "image/png")})
    assert diagnosis.status_code == 200
    assert diagnosis.json()["analysis"].startswith("Diagnosi")

    card = await client.post("/api/community/contribute", json={"name": "Fagiolo", "plants": 10, "rows": 40})
    assert card.status_code == 200
    assert card.json()["info"]["spacing"] == {"plants": 10, "rows": 40}

    points = (await client.get("/api/community/map")).json()["points"]
    assert {p["kind"] for p in points} == {"store", "user"}


@pytest.mark.asyncio
async def test_non_iso_dates_are_rejected(business_client):
    client, ctx = business_client
    tx = await client.post("/api/cashflow/transactions", json={
        "type": "income", "date": "15/08/2024", "description": "Vendita miele",
        "amount": 18, "contact_name": "Mercato Agricolo Locale",
    })
    assert tx.status_code == 400
    assert tx.json() == {"error": "Inserisci una data valida (AAAA-MM-GG)."}
    assert len(ctx.cash_book.transactions) == 6

    harvest = await client.post("/api/harvests", json={"vegetable_id": 1, "date": "ieri", "quantity": 2})
    assert harvest.status_code == 400
    assert len(ctx.harvests.harvests) == 3
