"""
Reusable multi-step UI flows used by the scenarios.
"""

from hellobooks_e2e.workflows import bills, invoices, vendors

__all__ = ["bills", "invoices", "vendors"]
