"""
Test data models for the records the scenarios create through the UI.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class Address(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str


class BankDetails(BaseModel):
    account_name: str
    account_number: str
    routing_number: str


class VendorProfile(BaseModel):
    """Everything the create-vendor form asks for."""

    name: str
    display_name: str
    email: str
    phone: str
    address: Address
    bank: Optional[BankDetails] = None
    payment_terms: str = "Net 30"
    tax_id: str = ""


class InvoiceLine(BaseModel):
    """One line item of an invoice or bill."""

    description: str
    quantity: int = Field(1, ge=1)
    rate: Decimal = Field(Decimal("0"), ge=0)

    @computed_field
    @property
    def amount(self) -> Decimal:
        return self.rate * self.quantity


class InvoiceDraft(BaseModel):
    """A sales invoice as entered on the create-invoice form."""

    reference: str
    invoice_date: date
    due_date: date
    lines: List[InvoiceLine] = Field(default_factory=list)
    customer: Optional[str] = Field(
        None, description="Customer option to pick; None picks the first one"
    )

    @computed_field
    @property
    def total(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))


class BillDraft(BaseModel):
    """A purchase bill saved as a draft."""

    bill_number: str
    issue_date: date
    due_date: date
    lines: List[InvoiceLine] = Field(default_factory=list)
    vendor: Optional[str] = Field(
        None, description="Vendor option to pick; None picks the first one"
    )
    expense_account: Optional[str] = None
    tax_rate: Optional[str] = Field(None, description="Tax rate option label")

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))
