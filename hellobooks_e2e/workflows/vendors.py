"""
Vendor flows on the Contacts (payees) pages.
"""

import re
from typing import Optional

from playwright.async_api import Locator

from hellobooks_e2e.data.models import VendorProfile
from hellobooks_e2e.ui import selectors
from hellobooks_e2e.ui.actions import SOFT_FAILURES, PageActions
from hellobooks_e2e.workflows.common import (
    DELETE_NAME,
    cancel_dialog,
    confirm_dialog,
    goto_list,
)

VENDORS_PATH = "/payees"
CREATE_VENDOR_ROUTE = "/payees/create-vendor"
VENDOR_SAVED_ROUTE = r"/vendor-info/|/payees"
VENDOR_DETAILS_ROUTE = r"/vendor-info/"
EDIT_VENDOR_ROUTE = r"/edit-vendor/"

VENDORS_TAB_NAME = re.compile(r"vendors", re.IGNORECASE)
ADD_VENDOR_NAME = re.compile(r"add vendor|new vendor|create vendor", re.IGNORECASE)
SAVE_NAME = re.compile(r"save|create|submit", re.IGNORECASE)
EDIT_NAME = re.compile(r"edit", re.IGNORECASE)
ROW_MENU_NAME = re.compile(r"more|actions|options|ellipsis|menu", re.IGNORECASE)
CONTACTS_HEADING = re.compile(r"contacts|payees|vendors", re.IGNORECASE)

SEARCH_SETTLE_MS = 1000
TAB_SETTLE_MS = 500


async def open_vendor_list(actions: PageActions) -> None:
    """Go to the Contacts list; raises if the session bounced to /login."""
    await goto_list(actions, VENDORS_PATH)


async def select_vendors_tab(actions: PageActions) -> bool:
    tab = actions.page.get_by_role("tab", name=VENDORS_TAB_NAME)

    async def click_tab() -> None:
        await tab.first.click()
        await actions.page.wait_for_timeout(TAB_SETTLE_MS)

    return await actions.optional_action(
        tab, click_tab, "Vendors tab not found; continuing on default tab"
    )


async def open_create_vendor_form(actions: PageActions) -> None:
    """Click Add Vendor and wait for the create form route."""
    await actions.click_button(ADD_VENDOR_NAME, "Add Vendor button not found")
    await actions.wait_for_page_ready(CREATE_VENDOR_ROUTE)


async def fill_vendor_form(actions: PageActions, profile: VendorProfile) -> None:
    """
    Fill every field of the vendor form that the page offers.

    Missing fields are noted and skipped; the bank section is only filled
    when the profile carries bank details.
    """
    await actions.fill_field(selectors.VENDOR_NAME, profile.name, "Vendor Name")
    await actions.fill_field(
        selectors.VENDOR_DISPLAY_NAME, profile.display_name, "Display Name"
    )
    await actions.fill_field(selectors.VENDOR_EMAIL, profile.email, "Email address")
    await actions.fill_field(selectors.VENDOR_PHONE, profile.phone, "Phone number")

    address = profile.address
    await actions.fill_field(selectors.VENDOR_STREET, address.street, "Street")
    await actions.fill_field(selectors.VENDOR_CITY, address.city, "City")
    await actions.fill_field(selectors.VENDOR_STATE, address.state, "State")
    await actions.fill_field(selectors.VENDOR_ZIP, address.zip_code, "ZIP")

    if profile.bank is not None:
        await actions.fill_field(
            selectors.VENDOR_BANK_ACCOUNT_NAME,
            profile.bank.account_name,
            "Bank Account Name",
        )
        await actions.fill_field(
            selectors.VENDOR_BANK_ACCOUNT_NUMBER,
            profile.bank.account_number,
            "Bank Account Number",
        )
        await actions.fill_field(
            selectors.VENDOR_ROUTING_NUMBER,
            profile.bank.routing_number,
            "Routing Number",
        )

    await actions.select_option(
        selectors.VENDOR_PAYMENT_TERMS, profile.payment_terms, "Payment Terms"
    )
    if profile.tax_id:
        await actions.fill_field(
            selectors.VENDOR_TAX_NUMBER, profile.tax_id, "GST/Tax Number"
        )


async def save_vendor(actions: PageActions) -> bool:
    return await actions.click_button(SAVE_NAME, "Save vendor button not found")


async def search_vendor(actions: PageActions, name: str) -> bool:
    """Type ``name`` into the list search box, if the list has one."""
    page = actions.page
    search = page.locator(selectors.SEARCH_INPUT).first
    if not await search.is_visible():
        return False
    await search.fill(name)
    await page.keyboard.press("Enter")
    await page.wait_for_timeout(SEARCH_SETTLE_MS)
    return True


async def trigger_row_delete(actions: PageActions, row: Locator) -> bool:
    """
    Start deleting ``row``: its own delete button, else its overflow menu.

    Returns:
        True if a delete control was clicked
    """
    page = actions.page

    row_delete = row.get_by_role("button", name=DELETE_NAME).first
    if await row_delete.count():
        if await actions.optional_action(
            row_delete, row_delete.click, "Delete button on row not found"
        ):
            return True

    menu_button = row.get_by_role("button", name=ROW_MENU_NAME).first

    async def delete_from_menu() -> None:
        await menu_button.click()
        await page.get_by_role("menuitem", name=DELETE_NAME).first.click()

    if await actions.optional_action(
        menu_button, delete_from_menu, "Action menu for delete not found"
    ):
        return True

    actions.note("Delete action could not be triggered")
    return False


async def confirm_vendor_delete(actions: PageActions) -> bool:
    return await confirm_dialog(actions)


async def cancel_vendor_delete(actions: PageActions) -> bool:
    return await cancel_dialog(actions)


async def open_vendor_details(actions: PageActions, row: Locator) -> bool:
    """Open the details page of the vendor in ``row``."""
    name_cell = row.locator(selectors.TABLE_CELL).first
    if not await actions.optional_action(
        name_cell, name_cell.click, "Vendor row not clickable"
    ):
        return False
    return await _reached(actions, VENDOR_DETAILS_ROUTE, "Vendor details page did not open")


async def edit_vendor(
    actions: PageActions,
    name: Optional[str] = None,
    email: Optional[str] = None,
    payment_terms: Optional[str] = None,
) -> bool:
    """
    Open the edit form from the details page, change fields and save.

    Fields left as None are not touched.

    Returns:
        True if the save button was clicked
    """
    await actions.click_button(EDIT_NAME, "Edit button not found")
    await _reached(actions, EDIT_VENDOR_ROUTE, "Edit vendor form did not open")

    if name is not None:
        await actions.fill_field(selectors.VENDOR_NAME, name, "Vendor Name")
    if email is not None:
        await actions.fill_field(selectors.VENDOR_EMAIL, email, "Email address")
    if payment_terms is not None:
        await actions.select_option(
            selectors.VENDOR_PAYMENT_TERMS, payment_terms, "Payment Terms"
        )

    return await save_vendor(actions)


async def _reached(actions: PageActions, route: str, note: str) -> bool:
    try:
        await actions.wait_for_page_ready(route)
        return True
    except SOFT_FAILURES:
        actions.note(note)
        return False
