"""
Tests for test-data models and factories.
"""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from hellobooks_e2e.data import (
    BillDraftFactory,
    InvoiceDraftFactory,
    InvoiceLine,
    VendorProfileFactory,
)
from hellobooks_e2e.data.factories import to_base36, unique_suffix


class TestUniqueSuffix:

    def test_strictly_increasing(self):
        values = [unique_suffix() for _ in range(50)]
        assert values == sorted(set(values))

    def test_follows_clock(self):
        with patch("hellobooks_e2e.data.factories._last_suffix", 0), \
                patch("hellobooks_e2e.data.factories.time.time", return_value=1_600_000_000.0):
            assert unique_suffix() == 1_600_000_000_000


class TestBase36:

    @pytest.mark.parametrize(
        "number, expected",
        [(0, "0"), (35, "z"), (36, "10"), (1296, "100"), (46655, "zzz")],
    )
    def test_to_base36(self, number, expected):
        assert to_base36(number) == expected

    def test_negative(self):
        with pytest.raises(ValueError):
            to_base36(-1)


class TestModels:

    def test_line_amount(self):
        line = InvoiceLine(description="Consulting", quantity=3, rate=Decimal("12.50"))
        assert line.amount == Decimal("37.50")
        assert line.model_dump()["amount"] == Decimal("37.50")

    def test_line_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            InvoiceLine(description="x", quantity=0)


class TestVendorProfileFactory:

    def test_naming_convention(self):
        vendor = VendorProfileFactory()
        suffix = vendor.name.removeprefix("Auto Vendor ")

        assert len(suffix) == 6 and suffix.isdigit()
        assert vendor.display_name == f"AutoVendor{suffix}"
        assert vendor.email == f"vendor{suffix}@example.com"
        assert vendor.phone == f"555000{suffix}"
        assert vendor.tax_id == f"GST-{suffix}"
        assert vendor.payment_terms == "Net 30"
        assert vendor.address.city
        assert len(vendor.bank.account_number) == 9

    def test_unique_names(self):
        names = {VendorProfileFactory().name for _ in range(20)}
        assert len(names) == 20

    def test_explicit_suffix(self):
        vendor = VendorProfileFactory(suffix="000042")
        assert vendor.name == "Auto Vendor 000042"


class TestInvoiceDraftFactory:

    def test_defaults(self):
        draft = InvoiceDraftFactory(suffix="abc")

        assert draft.reference == "AUTO-INV-abc"
        assert draft.invoice_date == date(2024, 1, 15)
        assert draft.due_date == date(2024, 2, 15)
        assert draft.customer is None
        assert [line.description for line in draft.lines] == ["Auto Line Item abc"]
        assert draft.total == Decimal("100")

    def test_unique_references(self):
        assert InvoiceDraftFactory().reference != InvoiceDraftFactory().reference


class TestBillDraftFactory:

    def test_defaults(self):
        draft = BillDraftFactory(suffix="xyz")

        assert draft.bill_number == "AUTO-BILL-xyz"
        assert draft.issue_date == date.today()
        assert draft.due_date - draft.issue_date == timedelta(days=30)
        assert draft.lines[0].description == "Auto Bill Item xyz"
        assert draft.subtotal == Decimal("100")
        assert draft.vendor is None

    def test_due_date_follows_issue_date(self):
        draft = BillDraftFactory(issue_date=date(2025, 1, 31))
        assert draft.due_date == date(2025, 3, 2)
