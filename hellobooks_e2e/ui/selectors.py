"""
Selector constants shared by the helpers and workflows.

Most form fields are matched with a comma-separated list of alternatives
because field names differ between app releases; the first visible match
wins.
"""

import re

TOAST = '[role="status"], .toast, .sonner-toast, [data-sonner-toast]'
TABLE = 'table, [role="table"]'
TABLE_ROW = 'table tbody tr, [role="row"]'
TABLE_CELL = 'td, [role="cell"]'
EMPTY_ROW_TEXT = re.compile(r"no data|empty", re.IGNORECASE)
ROW_MENU_BUTTON = 'button[aria-haspopup="menu"], button[aria-label*="more"], button:has-text("More")'
ROW_ACTION_TRIGGER = '[data-testid*="action"], button[aria-haspopup="menu"], button:has(svg)'
SEARCH_INPUT = 'input[placeholder*="Search"]'

# Vendor form
VENDOR_NAME = 'input[name="vendorName"], input[name="name"], input[placeholder*="Vendor Name" i]'
VENDOR_DISPLAY_NAME = 'input[name="displayName"], input[placeholder*="Display Name" i]'
VENDOR_EMAIL = 'input[type="email"][name="email"], input[name="email"], input[placeholder*="Email" i]'
VENDOR_PHONE = 'input[name="phone"], input[placeholder*="Phone" i], input[type="tel"]'
VENDOR_STREET = 'input[name="address1"], input[name="address.street"], input[placeholder*="Street" i]'
VENDOR_CITY = 'input[name="city"], input[name="address.city"], input[placeholder*="City" i]'
VENDOR_STATE = 'input[name="state"], input[name="address.state"], input[placeholder*="State" i]'
VENDOR_ZIP = 'input[name="zip"], input[name="address.zip"], input[placeholder*="ZIP" i], input[name="postalCode"]'
VENDOR_BANK_ACCOUNT_NAME = 'input[name="bankAccountName"], input[placeholder*="Account Name" i]'
VENDOR_BANK_ACCOUNT_NUMBER = 'input[name="bankAccountNumber"], input[placeholder*="Account Number" i]'
VENDOR_ROUTING_NUMBER = 'input[name="routingNumber"], input[placeholder*="Routing" i]'
VENDOR_PAYMENT_TERMS = (
    'select[name="paymentTerms"], [data-testid="payment-terms"], [data-testid*="terms"], '
    '#paymentTerms, [role="combobox"]'
)
VENDOR_TAX_NUMBER = (
    'input[name="gstNumber"], input[name="taxNumber"], input[name="taxId"], '
    'input[placeholder*="GST" i], input[placeholder*="Tax" i]'
)
VENDOR_HEADING = 'h1, h2, .vendor-name'

# Bill form
BILL_VENDOR = '[data-testid*="vendor"], [role="combobox"][name*="vendor" i], #vendor'
BILL_NUMBER = 'input[name="billNumber"], input[name="bill_number"], input[placeholder*="Bill" i]'
BILL_ISSUE_DATE = 'input[name="issueDate"], input[name="billDate"], input[placeholder*="Issue" i]'
BILL_DUE_DATE = 'input[name="dueDate"], input[placeholder*="Due" i]'
LINE_DESCRIPTION = 'input[name*="description" i], textarea[name*="description" i]'
LINE_QUANTITY = 'input[name*="quantity" i], input[name*="qty" i]'
LINE_RATE = 'input[name*="rate" i], input[name*="price" i]'
LINE_ACCOUNT = '[data-testid*="account"], [role="combobox"][name*="account" i]'
LINE_TAX = '[data-testid*="tax"], [role="combobox"][name*="tax" i]'
