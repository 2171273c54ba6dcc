"""Cash-flow aggregation logic.

Pure functions over the transaction list and contact directory: totals,
counterparties, the contact agenda, per-product history and the monthly charts.
"""
import unicodedata
from collections import OrderedDict
from datetime import date
from typing import Dict, List, Optional

from agro.domain.CashBook import CashBook, Contact, Transaction
from agro.logic.reporting.periods import month_buckets, month_key
from agro.utilities.constants import (
    CASHFLOW_CHART_MONTHS,
    DEFAULT_UNIT_LABEL,
    MIN_SEARCH_CHARS,
    TREND_CHART_MONTHS,
)

__all__ = [
    "compute_totals", "counterparties", "build_agenda", "product_history",
    "monthly_performance", "product_detail", "suggest_descriptions", "suggest_contacts",
]


def collation_key(name: str):
    """Accent- and case-insensitive sort key; ties fall back to the raw name."""
    stripped = "".join(c for c in unicodedata.normalize("NFKD", name) if not unicodedata.combining(c))
    return (stripped.casefold(), name)


def compute_totals(transactions: List[Transaction]) -> Dict[str, float]:
    income = sum(t.amount for t in transactions if t.is_income)
    expenses = sum(t.amount for t in transactions if not t.is_income)
    return {"income": income, "expenses": expenses, "balance": income - expenses}


def counterparties(transactions: List[Transaction], contacts: List[Contact], kind: str) -> List[Contact]:
    """Contacts appearing on ``kind`` transactions (income -> customers, expense -> suppliers).

    Names are resolved by exact match against the directory; unknown names are skipped.
    """
    by_name = {c.name: c for c in contacts}
    names = OrderedDict.fromkeys(t.contact_name for t in transactions if t.type == kind)
    return [by_name[n] for n in names if n in by_name]


def build_agenda(transactions: List[Transaction], contacts: List[Contact], search: str = "") -> List[dict]:
    """Every known counterpart with its signed balance and transaction count.

    Includes directory contacts without transactions (balance 0) and
    transaction names missing from the directory (no phone/email).
    """
    totals: Dict[str, dict] = {}
    for t in transactions:
        entry = totals.setdefault(t.contact_name, {"total": 0.0, "count": 0})
        entry["total"] += t.amount if t.is_income else -t.amount
        entry["count"] += 1
    by_name = {c.name: c for c in contacts}

    names = list(OrderedDict.fromkeys(list(totals) + [c.name for c in contacts]))
    agenda = []
    for name in names:
        contact = by_name.get(name)
        stats = totals.get(name, {"total": 0.0, "count": 0})
        agenda.append({
            "name": name,
            "phone": contact.phone if contact else None,
            "email": contact.email if contact else None,
            "total": stats["total"],
            "count": stats["count"],
        })

    term = (search or "").strip().lower()
    if term:
        agenda = [
            a for a in agenda
            if term in a["name"].lower()
            or term in (a["email"] or "").lower()
            or term in (a["phone"] or "")
        ]
    agenda.sort(key=lambda a: collation_key(a["name"]))
    return agenda


def product_history(transactions: List[Transaction], kind: str) -> List[dict]:
    """Per-product summary of ``kind`` transactions, largest total first.

    Products are grouped by trimmed, lower-cased description; the first
    description seen names the group. Quantities are summed as recorded,
    mixed units are not converted.
    """
    groups: Dict[str, dict] = {}
    for t in transactions:
        if t.type != kind:
            continue
        key = t.description.strip().lower()
        group = groups.get(key)
        if group is None:
            group = groups[key] = {
                "product_name": t.description,
                "total_amount": 0.0,
                "total_quantity": 0.0,
                "unit": "",
                "contacts": [],
                "count": 0,
            }
        group["total_amount"] += t.amount
        group["total_quantity"] += t.quantity or 0
        if not group["unit"] and t.unit:
            group["unit"] = t.unit
        if t.contact_name not in group["contacts"]:
            group["contacts"].append(t.contact_name)
        group["count"] += 1

    history = []
    for group in groups.values():
        qty = group["total_quantity"]
        if not group["unit"]:
            group["unit"] = DEFAULT_UNIT_LABEL if qty > 0 else ""
        group["average_price"] = group["total_amount"] / qty if qty > 0 else 0
        history.append(group)
    history.sort(key=lambda g: g["total_amount"], reverse=True)
    return history


def monthly_performance(transactions: List[Transaction], today: Optional[date] = None,
                        months: int = CASHFLOW_CHART_MONTHS) -> dict:
    """Income and expense per month for the last ``months`` months (current included)."""
    buckets = month_buckets(months, today)
    index = {}
    for b in buckets:
        b["income"] = 0.0
        b["expense"] = 0.0
        index[b["key"]] = b
    for t in transactions:
        bucket = index.get(month_key(t.date))
        if bucket is None:
            continue
        if t.is_income:
            bucket["income"] += t.amount
        else:
            bucket["expense"] += t.amount
    max_amount = max([b["income"] for b in buckets] + [b["expense"] for b in buckets] + [0])
    max_amount = max_amount if max_amount > 0 else 1
    for b in buckets:
        b["income_height"] = b["income"] / max_amount
        b["expense_height"] = b["expense"] / max_amount
    return {"months": buckets, "max_amount": max_amount}


def product_detail(transactions: List[Transaction], product_name: str, today: Optional[date] = None) -> dict:
    """Transactions of one product and its 12-month quantity/price trend."""
    wanted = product_name.lower()
    matching = [t for t in transactions if t.description.lower() == wanted]
    matching.sort(key=lambda t: t.date, reverse=True)

    buckets = month_buckets(TREND_CHART_MONTHS, today, with_year=True)
    index = {}
    for b in buckets:
        b["quantity"] = 0.0
        b["amount"] = 0.0
        index[b["key"]] = b
    for t in matching:
        bucket = index.get(month_key(t.date))
        if bucket is not None:
            bucket["quantity"] += t.quantity or 0
            bucket["amount"] += t.amount
    for b in buckets:
        b["avg_price"] = b["amount"] / b["quantity"] if b["quantity"] > 0 else 0

    max_quantity = max(b["quantity"] for b in buckets)
    max_price = max(b["avg_price"] for b in buckets)
    return {
        "product_name": product_name,
        "transactions": matching,
        "months": buckets,
        "max_quantity": max_quantity if max_quantity > 0 else 1,
        "max_price": max_price if max_price > 0 else 1,
    }


def suggest_descriptions(transactions: List[Transaction], text: str) -> List[str]:
    """Distinct past descriptions containing ``text`` (needs at least two characters)."""
    term = (text or "").strip().lower()
    if len(term) < MIN_SEARCH_CHARS:
        return []
    found = OrderedDict.fromkeys(t.description for t in transactions if term in t.description.lower())
    return list(found)


def suggest_contacts(book: CashBook, kind: str, text: str) -> List[Contact]:
    """Customers (income) or suppliers (expense) whose name contains ``text``."""
    term = (text or "").strip().lower()
    pool = counterparties(book.transactions, book.contacts, kind)
    if not term:
        return pool
    return [c for c in pool if term in c.name.lower()]
