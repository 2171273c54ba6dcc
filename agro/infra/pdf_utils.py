import io
from datetime import date

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from agro.logic.reporting.cashflow import compute_totals, product_history

HEADER_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2F5D3A")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def _eur(amount: float) -> str:
    # Italian grouping: 1.234,50 €
    return f"{amount:,.2f} €".replace(",", "X").replace(".", ",").replace("X", ".")


def _history_table(rows):
    data = [["Prodotto", "Quantità", "Totale", "Prezzo medio", "Contatti"]]
    for g in rows:
        qty = f"{g['total_quantity']:g} {g['unit']}".strip() if g["total_quantity"] else "-"
        data.append([
            g["product_name"],
            qty,
            _eur(g["total_amount"]),
            _eur(g["average_price"]) if g["average_price"] else "-",
            ", ".join(g["contacts"]),
        ])
    table = Table(data, repeatRows=1)
    table.setStyle(HEADER_STYLE)
    return table


def generate_cashflow_pdf(transactions, farm_name: str = "", today: date = None) -> bytes:
    """Cash-flow statement: totals plus the sales and purchase history tables."""
    today = today or date.today()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)
    styles = getSampleStyleSheet()
    title = "Entrate/Uscite" + (f" – {farm_name}" if farm_name else "")
    elements = [
        Paragraph(title, styles["Title"]),
        Paragraph(f"Generato il {today.strftime('%d/%m/%Y')}", styles["Normal"]),
        Spacer(1, 12),
    ]

    totals = compute_totals(transactions)
    summary = Table([
        ["Entrate", "Uscite", "Saldo"],
        [_eur(totals["income"]), _eur(totals["expenses"]), _eur(totals["balance"])],
    ])
    summary.setStyle(HEADER_STYLE)
    elements += [summary, Spacer(1, 16)]

    for heading, kind in (("Storico vendite", "income"), ("Storico acquisti", "expense")):
        rows = product_history(transactions, kind)
        elements.append(Paragraph(heading, styles["Heading2"]))
        if rows:
            elements.append(_history_table(rows))
        else:
            elements.append(Paragraph("Nessuna transazione.", styles["Normal"]))
        elements.append(Spacer(1, 12))

    doc.build(elements)
    return buf.getvalue()
