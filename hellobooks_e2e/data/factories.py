"""
Factories for generating unique test data.

Every record a scenario creates carries a suffix derived from the current
time in milliseconds, so reruns never collide with leftovers from an
earlier run.
"""

import threading
import time
from datetime import date, timedelta
from decimal import Decimal

import factory
from faker import Faker

from hellobooks_e2e.data.models import (
    Address,
    BankDetails,
    BillDraft,
    InvoiceDraft,
    InvoiceLine,
    VendorProfile,
)

fake = Faker()

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_suffix_lock = threading.Lock()
_last_suffix = 0


def unique_suffix() -> int:
    """Millisecond timestamp, strictly increasing within this process."""
    global _last_suffix
    with _suffix_lock:
        _last_suffix = max(int(time.time() * 1000), _last_suffix + 1)
        return _last_suffix


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


class AddressFactory(factory.Factory):
    class Meta:
        model = Address

    street = factory.Faker("street_address")
    city = factory.Faker("city")
    state = factory.Faker("state_abbr")
    zip_code = factory.Faker("zipcode")


class BankDetailsFactory(factory.Factory):
    class Meta:
        model = BankDetails

    account_name = factory.Faker("name")
    account_number = factory.Faker("numerify", text="#########")
    routing_number = factory.Faker("aba")


class VendorProfileFactory(factory.Factory):
    """Vendor named ``Auto Vendor <suffix>``."""

    class Meta:
        model = VendorProfile

    class Params:
        suffix = factory.LazyFunction(lambda: str(unique_suffix())[-6:])

    name = factory.LazyAttribute(lambda o: f"Auto Vendor {o.suffix}")
    display_name = factory.LazyAttribute(lambda o: f"AutoVendor{o.suffix}")
    email = factory.LazyAttribute(lambda o: f"vendor{o.suffix}@example.com")
    phone = factory.LazyAttribute(lambda o: f"555000{o.suffix}")
    address = factory.SubFactory(AddressFactory)
    bank = factory.SubFactory(BankDetailsFactory)
    payment_terms = "Net 30"
    tax_id = factory.LazyAttribute(lambda o: f"GST-{o.suffix}")


class InvoiceLineFactory(factory.Factory):
    class Meta:
        model = InvoiceLine

    description = factory.Faker("catch_phrase")
    quantity = 2
    rate = Decimal("50")


class InvoiceDraftFactory(factory.Factory):
    """Invoice referenced ``AUTO-INV-<base36 suffix>`` with one line item."""

    class Meta:
        model = InvoiceDraft

    class Params:
        suffix = factory.LazyFunction(lambda: to_base36(unique_suffix()))

    reference = factory.LazyAttribute(lambda o: f"AUTO-INV-{o.suffix}")
    invoice_date = date(2024, 1, 15)
    due_date = date(2024, 2, 15)
    lines = factory.LazyAttribute(
        lambda o: [InvoiceLineFactory(description=f"Auto Line Item {o.suffix}")]
    )
    customer = None


class BillDraftFactory(factory.Factory):
    """Draft bill numbered ``AUTO-BILL-<base36 suffix>``, due in 30 days."""

    class Meta:
        model = BillDraft

    class Params:
        suffix = factory.LazyFunction(lambda: to_base36(unique_suffix()))

    bill_number = factory.LazyAttribute(lambda o: f"AUTO-BILL-{o.suffix}")
    issue_date = factory.LazyFunction(date.today)
    due_date = factory.LazyAttribute(lambda o: o.issue_date + timedelta(days=30))
    lines = factory.LazyAttribute(
        lambda o: [InvoiceLineFactory(description=f"Auto Bill Item {o.suffix}")]
    )
    vendor = None
    expense_account = None
    tax_rate = None
