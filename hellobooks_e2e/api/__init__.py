"""
REST clients for the application under test.
"""

from hellobooks_e2e.api.vendors import (
    DELETE_OK_STATUSES,
    ApiResponse,
    VendorsApi,
    extract_vendor_id,
)

__all__ = [
    "ApiResponse",
    "DELETE_OK_STATUSES",
    "VendorsApi",
    "extract_vendor_id",
]
