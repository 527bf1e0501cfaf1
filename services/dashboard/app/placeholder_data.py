"""
Fixture rows for the dashboard demo.

Invoices have no natural key, so each gets a deterministic id derived from its content;
re-running the seed then hits `ON CONFLICT (id)` instead of inserting duplicates.
"""

from __future__ import annotations

import hashlib
import uuid
from dataclasses import dataclass, field
from datetime import date


def _det_uuid(*parts: str) -> uuid.UUID:
    h = hashlib.sha256("||".join(parts).encode("utf-8")).hexdigest()
    return uuid.UUID(h[:32])


@dataclass(frozen=True)
class UserRow:
    id: uuid.UUID
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class CustomerRow:
    id: uuid.UUID
    name: str
    email: str
    image_url: str


@dataclass(frozen=True)
class InvoiceRow:
    customer_id: uuid.UUID
    amount: int  # cents
    status: str
    date: date
    id: uuid.UUID = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "id",
            _det_uuid("invoice", str(self.customer_id), str(self.amount), self.status, self.date.isoformat()),
        )


@dataclass(frozen=True)
class RevenueRow:
    month: str
    revenue: int


USERS: list[UserRow] = [
    UserRow(
        id=uuid.UUID("410544b2-4001-4271-9855-fec4b6a6442a"),
        name="User",
        email="user@nextmail.com",
        password="123456",
    ),
]

CUSTOMERS: list[CustomerRow] = [
    CustomerRow(
        id=uuid.UUID("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"),
        name="Evil Rabbit",
        email="evil@rabbit.com",
        image_url="/customers/evil-rabbit.png",
    ),
    CustomerRow(
        id=uuid.UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a"),
        name="Delba de Oliveira",
        email="delba@oliveira.com",
        image_url="/customers/delba-de-oliveira.png",
    ),
    CustomerRow(
        id=uuid.UUID("3958dc9e-742f-4377-85e9-fec4b6a6442a"),
        name="Lee Robinson",
        email="lee@robinson.com",
        image_url="/customers/lee-robinson.png",
    ),
    CustomerRow(
        id=uuid.UUID("76d65c26-f784-44a2-ac19-586678f7c2f2"),
        name="Michael Novotny",
        email="michael@novotny.com",
        image_url="/customers/michael-novotny.png",
    ),
    CustomerRow(
        id=uuid.UUID("cc27c14a-0acf-4f4a-a6c9-d45682c144b9"),
        name="Amy Burns",
        email="amy@burns.com",
        image_url="/customers/amy-burns.png",
    ),
    CustomerRow(
        id=uuid.UUID("13d07535-c59e-4157-a011-f8d2ef4e0cbb"),
        name="Balazs Orban",
        email="balazs@orban.com",
        image_url="/customers/balazs-orban.png",
    ),
]

_c = [c.id for c in CUSTOMERS]

INVOICES: list[InvoiceRow] = [
    InvoiceRow(customer_id=_c[0], amount=15795, status="pending", date=date(2022, 12, 6)),
    InvoiceRow(customer_id=_c[1], amount=20348, status="pending", date=date(2022, 11, 14)),
    InvoiceRow(customer_id=_c[4], amount=3040, status="paid", date=date(2022, 10, 29)),
    InvoiceRow(customer_id=_c[3], amount=44800, status="paid", date=date(2023, 9, 10)),
    InvoiceRow(customer_id=_c[5], amount=34577, status="pending", date=date(2023, 8, 5)),
    InvoiceRow(customer_id=_c[2], amount=54246, status="pending", date=date(2023, 7, 16)),
    InvoiceRow(customer_id=_c[0], amount=666, status="pending", date=date(2023, 6, 27)),
    InvoiceRow(customer_id=_c[3], amount=32545, status="paid", date=date(2023, 6, 9)),
    InvoiceRow(customer_id=_c[4], amount=1250, status="paid", date=date(2023, 6, 17)),
    InvoiceRow(customer_id=_c[5], amount=8546, status="paid", date=date(2023, 6, 7)),
    InvoiceRow(customer_id=_c[1], amount=500, status="paid", date=date(2023, 8, 19)),
    InvoiceRow(customer_id=_c[5], amount=8945, status="paid", date=date(2023, 6, 3)),
    InvoiceRow(customer_id=_c[2], amount=1000, status="paid", date=date(2022, 6, 5)),
]

REVENUE: list[RevenueRow] = [
    RevenueRow(month="Jan", revenue=2000),
    RevenueRow(month="Feb", revenue=1800),
    RevenueRow(month="Mar", revenue=2200),
    RevenueRow(month="Apr", revenue=2500),
    RevenueRow(month="May", revenue=2300),
    RevenueRow(month="Jun", revenue=3200),
    RevenueRow(month="Jul", revenue=3500),
    RevenueRow(month="Aug", revenue=3700),
    RevenueRow(month="Sep", revenue=2500),
    RevenueRow(month="Oct", revenue=2800),
    RevenueRow(month="Nov", revenue=3000),
    RevenueRow(month="Dec", revenue=4800),
]
