from datetime import date

import pytest

from agro.utilities.errors import ValidationFailed
from agro.utilities.validators import (
    CatalogContributionForm,
    HarvestForm,
    MarketplaceItemForm,
    RegistrationForm,
    TaskForm,
    TransactionForm,
)


def _transaction(**overrides):
    data = {"type": "income", "date": "2024-07-18", "description": "Vendita uova",
            "amount": "12.5", "contact_name": "Bottega Verde"}
    data.update(overrides)
    return data


def test_transaction_defaults_category_by_type():
    assert TransactionForm.parse(_transaction()).category == "Vendita"
    assert TransactionForm.parse(_transaction(type="expense")).category == "Fornitura"


def test_transaction_message_order():
    with pytest.raises(ValidationFailed, match="Descrizione, importo e contatto sono obbligatori."):
        TransactionForm.parse(_transaction(description="  ", amount="-3"))
    with pytest.raises(ValidationFailed, match="L'importo deve essere un numero positivo."):
        TransactionForm.parse(_transaction(amount="0"))
    with pytest.raises(ValidationFailed, match="L'importo deve essere un numero positivo."):
        TransactionForm.parse(_transaction(amount="abc"))
    with pytest.raises(ValidationFailed, match="La quantità deve essere un numero positivo."):
        TransactionForm.parse(_transaction(quantity="-1"))


def test_transaction_unit_only_with_quantity():
    assert TransactionForm.parse(_transaction(quantity="", unit="kg")).unit is None
    form = TransactionForm.parse(_transaction(quantity="4", unit="l"))
    assert form.quantity == 4
    assert form.unit == "l"


def test_harvest_form():
    form = HarvestForm.parse({"vegetable_id": "2", "date": "2024-07-25", "quantity": "1.5"})
    assert form.vegetable_id == 2
    assert form.unit == "kg"
    with pytest.raises(ValidationFailed, match="Ortaggio, data e quantità sono campi obbligatori."):
        HarvestForm.parse({"date": "2024-07-25", "quantity": "1"})
    with pytest.raises(ValidationFailed, match="La quantità deve essere un numero positivo."):
        HarvestForm.parse({"vegetable_id": 2, "date": "2024-07-25", "quantity": 0})


def test_task_title_required():
    with pytest.raises(ValidationFailed, match="Il titolo è obbligatorio."):
        TaskForm.parse({"title": ""})
    assert TaskForm.parse({"title": " Potare ", "due_date": "2024-08-01"}).title == "Potare"


def test_marketplace_produce_has_no_condition():
    form = MarketplaceItemForm.parse({
        "type": "produce", "name": "Uova", "description": "Dozzina di uova fresche", "price": 4,
        "image_url": "https://img.test/uova.png", "location": "Roma", "condition": "Come Nuovo",
    })
    assert form.condition is None
    assert form.seller == "Mario Rossi"
    with pytest.raises(ValidationFailed, match="Tutti i campi sono obbligatori."):
        MarketplaceItemForm.parse({"type": "equipment", "name": "Zappa"})


def test_registration_address_and_email():
    form = RegistrationForm.parse({
        "name": "Anna", "surname": "Verdi", "street": "Via dei Campi 3", "city": "Latina",
        "province": "lt", "cap": "04100", "email": "anna@example.com",
    })
    assert form.address == "Via dei Campi 3, 04100 Latina (LT)"
    with pytest.raises(ValidationFailed, match="Inserisci un indirizzo email valido."):
        RegistrationForm.parse({
            "name": "Anna", "surname": "Verdi", "street": "Via dei Campi 3", "city": "Latina",
            "province": "LT", "cap": "04100", "email": "anna-at-example",
        })


def test_catalog_contribution_reads_yield_alias():
    form = CatalogContributionForm.parse({"name": "Fagiolo", "plants": 10, "rows": 40, "yield": "1 kg/m²"})
    assert form.yield_ == "1 kg/m²"
    assert "Resa: 1 kg/m²" in form.describe()


@pytest.mark.parametrize("value", ["15/08/2024", "2024-8-15", "2024-02-30", "ieri"])
def test_transaction_date_must_be_iso(value):
    with pytest.raises(ValidationFailed, match=r"Inserisci una data valida \(AAAA-MM-GG\)."):
        TransactionForm.parse(_transaction(date=value))


def test_transaction_blank_date_is_today():
    assert TransactionForm.parse(_transaction(date=" ")).date == date.today().isoformat()


def test_transaction_unit_defaults_to_pieces():
    assert TransactionForm.parse(_transaction(quantity="6")).unit == "unità"
    assert TransactionForm.parse(_transaction(quantity="6", unit="")).unit == "unità"


def test_harvest_date_must_be_iso():
    with pytest.raises(ValidationFailed, match=r"Inserisci una data valida \(AAAA-MM-GG\)."):
        HarvestForm.parse({"vegetable_id": 1, "date": "ieri", "quantity": 2})
    with pytest.raises(ValidationFailed, match="Ortaggio, data e quantità sono campi obbligatori."):
        HarvestForm.parse({"vegetable_id": 1, "date": "", "quantity": 2})


@pytest.mark.parametrize("price", [0, -5, float("nan")])
def test_marketplace_price_must_be_positive(price):
    with pytest.raises(ValidationFailed, match="Tutti i campi sono obbligatori."):
        MarketplaceItemForm.parse({
            "type": "equipment", "name": "Zappa", "description": "Manico in frassino", "price": price,
            "image_url": "https://img.test/zappa.png", "location": "Rieti",
        })
