import logging

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response

from agro.api.context import AppContext, require_view
from agro.infra.pdf_utils import generate_cashflow_pdf
from agro.domain.Navigation import View
from agro.logic.reporting.cashflow import (
    build_agenda,
    compute_totals,
    counterparties,
    monthly_performance,
    product_detail,
    product_history,
    suggest_contacts,
    suggest_descriptions,
)
from agro.utilities.validators import TransactionForm

router = APIRouter()
logger = logging.getLogger(__name__)

cashflow_access = require_view(View.CASH_FLOW)
KIND_PATTERN = "^(income|expense)$"


@router.get("/api/cashflow")
async def api_cashflow(ctx: AppContext = Depends(cashflow_access)):
    book = ctx.cash_book
    return {
        "totals": compute_totals(book.transactions),
        "transactions": [t.to_dict() for t in book.transactions],
        "customers": [c.to_dict() for c in counterparties(book.transactions, book.contacts, "income")],
        "suppliers": [c.to_dict() for c in counterparties(book.transactions, book.contacts, "expense")],
        "performance": monthly_performance(book.transactions),
    }


@router.post("/api/cashflow/transactions")
async def api_add_transaction(payload: dict = Body(...), ctx: AppContext = Depends(cashflow_access)):
    """Record a transaction; an unknown counterpart is added to the directory."""
    form = TransactionForm.parse(payload)
    book = ctx.cash_book
    new_contact = None
    if book.is_new_contact(form.contact_name):
        new_contact = {"name": form.contact_name, "phone": form.contact_phone, "email": form.contact_email}
    tx = book.add_transaction(
        form.model_dump(exclude={"contact_phone", "contact_email"}),
        new_contact,
    )
    logger.info("Transaction %d recorded (%s %.2f)", tx.id, tx.type, tx.amount)
    return {"status": "success", "transaction": tx.to_dict(), "new_contact": new_contact is not None}


@router.get("/api/cashflow/contacts/check")
async def api_check_contact(name: str = Query(""), ctx: AppContext = Depends(cashflow_access)):
    return {"name": name, "is_new": ctx.cash_book.is_new_contact(name)}


@router.get("/api/cashflow/agenda")
async def api_agenda(search: str = Query(""), ctx: AppContext = Depends(cashflow_access)):
    book = ctx.cash_book
    return {"contacts": build_agenda(book.transactions, book.contacts, search)}


@router.get("/api/cashflow/products")
async def api_products(type: str = Query("income", pattern=KIND_PATTERN),
                       ctx: AppContext = Depends(cashflow_access)):
    return {"type": type, "products": product_history(ctx.cash_book.transactions, type)}


@router.get("/api/cashflow/products/{product_name}")
async def api_product_detail(product_name: str, ctx: AppContext = Depends(cashflow_access)):
    detail = product_detail(ctx.cash_book.transactions, product_name)
    detail["transactions"] = [t.to_dict() for t in detail["transactions"]]
    return detail


@router.get("/api/cashflow/suggest/descriptions")
async def api_suggest_descriptions(q: str = Query(""), ctx: AppContext = Depends(cashflow_access)):
    return {"descriptions": suggest_descriptions(ctx.cash_book.transactions, q)}


@router.get("/api/cashflow/suggest/contacts")
async def api_suggest_contacts(type: str = Query("income", pattern=KIND_PATTERN), q: str = Query(""),
                               ctx: AppContext = Depends(cashflow_access)):
    return {"contacts": [c.to_dict() for c in suggest_contacts(ctx.cash_book, type, q)]}


@router.get("/api/cashflow/report.pdf")
async def api_cashflow_pdf(ctx: AppContext = Depends(cashflow_access)):
    user = ctx.session.user
    farm_name = (user.company or user.full_name) if user else ""
    pdf_bytes = generate_cashflow_pdf(ctx.cash_book.transactions, farm_name)
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": 'attachment; filename="entrate_uscite.pdf"'})
