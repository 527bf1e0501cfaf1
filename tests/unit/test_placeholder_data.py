from __future__ import annotations

from datetime import date


def test_fixture_sizes() -> None:
    from services.dashboard.app import placeholder_data as data

    assert len(data.USERS) == 1
    assert len(data.CUSTOMERS) == 6
    assert len(data.INVOICES) == 13
    assert len(data.REVENUE) == 12


def test_invoice_ids_are_unique_and_deterministic() -> None:
    from services.dashboard.app.placeholder_data import INVOICES, InvoiceRow

    ids = [i.id for i in INVOICES]
    assert len(set(ids)) == len(ids)

    first = INVOICES[0]
    again = InvoiceRow(customer_id=first.customer_id, amount=first.amount, status=first.status, date=first.date)
    assert again.id == first.id


def test_invoices_reference_known_customers() -> None:
    from services.dashboard.app.placeholder_data import CUSTOMERS, INVOICES

    known = {c.id for c in CUSTOMERS}
    assert all(i.customer_id in known for i in INVOICES)
    assert {i.status for i in INVOICES} <= {"pending", "paid"}
    assert all(isinstance(i.date, date) for i in INVOICES)


def test_revenue_months_fit_column_and_are_unique() -> None:
    from services.dashboard.app.placeholder_data import REVENUE

    months = [r.month for r in REVENUE]
    assert len(set(months)) == len(months)
    assert all(len(m) <= 4 for m in months)
