"""
Test data models and factories.
"""

from hellobooks_e2e.data.factories import (
    BillDraftFactory,
    InvoiceDraftFactory,
    InvoiceLineFactory,
    VendorProfileFactory,
    to_base36,
    unique_suffix,
)
from hellobooks_e2e.data.models import (
    Address,
    BankDetails,
    BillDraft,
    InvoiceDraft,
    InvoiceLine,
    VendorProfile,
)

__all__ = [
    "Address",
    "BankDetails",
    "BillDraft",
    "BillDraftFactory",
    "InvoiceDraft",
    "InvoiceDraftFactory",
    "InvoiceLine",
    "InvoiceLineFactory",
    "VendorProfile",
    "VendorProfileFactory",
    "to_base36",
    "unique_suffix",
]
