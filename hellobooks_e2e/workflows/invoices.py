"""
Sales invoice flows.

Creating an invoice is strict end to end: every control is waited for with
the full action timeout and a missing one fails the test. Deleting goes
through the soft-fail helpers.
"""

import re

from playwright.async_api import Locator, expect

from hellobooks_e2e.data.models import InvoiceDraft
from hellobooks_e2e.ui import selectors
from hellobooks_e2e.ui.actions import PageActions
from hellobooks_e2e.workflows.common import (
    delete_row_via_menu,
    goto_list,
    money_pattern,
)

HOME_PATH = "/"
INVOICE_LIST_PATH = "/invoices/list"
INVOICE_SAVED_ROUTE = re.compile(r"/invoices/(list|preview)")

SALES_LINK = re.compile(r"sales", re.IGNORECASE)
INVOICES_LINK = re.compile(r"invoices", re.IGNORECASE)
NEW_INVOICE_NAME = re.compile(r"new invoice", re.IGNORECASE)
INVOICE_FORM_HEADING = re.compile(r"create invoice|new invoice", re.IGNORECASE)
CUSTOMER_NAME = re.compile(r"customer", re.IGNORECASE)
CUSTOMER_SELECTED = re.compile(r".+")
SAVE_NAME = re.compile(r"save", re.IGNORECASE)

EXPECTED_COLUMNS = (
    (re.compile(r"invoice", re.IGNORECASE), "Invoice"),
    (re.compile(r"customer|client", re.IGNORECASE), "Customer"),
    (re.compile(r"status", re.IGNORECASE), "Status"),
)


async def open_invoice_list(actions: PageActions) -> None:
    """
    Reach the invoice list through the sidebar.

    Falls back to the list URL when the sidebar links are missing; the final
    route check is strict.
    """
    page = actions.page
    await goto_list(actions, HOME_PATH)

    sales = page.get_by_role("link", name=SALES_LINK)
    await actions.optional_action(
        sales, sales.first.click, "Sales sidebar link not found"
    )
    invoices = page.get_by_role("link", name=INVOICES_LINK)
    await actions.optional_action(
        invoices, invoices.first.click, "Invoices sidebar link not found"
    )

    if INVOICE_LIST_PATH not in page.url:
        await page.goto(actions.settings.url_for(INVOICE_LIST_PATH))
    await actions.wait_for_page_ready(INVOICE_LIST_PATH)


async def verify_invoice_list_columns(actions: PageActions) -> bool:
    """Soft checks for the heading, the table and its expected columns."""
    page = actions.page
    results = [
        await actions.safe_expect_visible(
            page.get_by_role("heading", name=INVOICES_LINK).first,
            "Invoices page heading not visible",
        ),
        await actions.safe_expect_visible(
            page.locator(selectors.TABLE).first, "Invoices table not visible"
        ),
    ]
    for pattern, label in EXPECTED_COLUMNS:
        results.append(
            await actions.safe_expect_visible(
                page.get_by_role("columnheader", name=pattern).first,
                f"{label} column header not visible",
            )
        )
    return all(results)


async def open_invoice_form(actions: PageActions) -> None:
    page = actions.page
    timeout = actions.settings.action_timeout_ms

    await page.goto(actions.settings.url_for(INVOICE_LIST_PATH), timeout=timeout)
    await page.wait_for_load_state("networkidle", timeout=timeout)

    new_invoice = page.get_by_role("button", name=NEW_INVOICE_NAME)
    await new_invoice.wait_for(state="visible", timeout=timeout)
    await new_invoice.click(timeout=timeout)
    await page.wait_for_load_state("networkidle", timeout=timeout)

    await expect(page.get_by_role("heading", name=INVOICE_FORM_HEADING)).to_be_visible(
        timeout=actions.settings.expect_timeout_ms
    )


async def fill_invoice_form(actions: PageActions, draft: InvoiceDraft) -> None:
    """Pick the customer and enter the lines, dates and reference."""
    page = actions.page
    timeout = actions.settings.action_timeout_ms

    customer = page.get_by_role("combobox", name=CUSTOMER_NAME)
    await customer.wait_for(state="visible", timeout=timeout)
    await customer.click(timeout=timeout)
    if draft.customer:
        option = page.get_by_role("option", name=re.compile(re.escape(draft.customer), re.I))
    else:
        option = page.get_by_role("option")
    await option.first.wait_for(state="visible", timeout=timeout)
    await option.first.click(timeout=timeout)

    for index, line in enumerate(draft.lines):
        await _fill_by_label(page, r"description", line.description, index, timeout)
        await _fill_by_label(page, r"quantity", str(line.quantity), index, timeout)
        await _fill_by_label(page, r"rate", str(line.rate), index, timeout)

    await _fill_by_label(page, r"invoice date", draft.invoice_date.isoformat(), 0, timeout)
    await _fill_by_label(page, r"due date", draft.due_date.isoformat(), 0, timeout)
    await _fill_by_label(page, r"reference", draft.reference, 0, timeout)


async def save_invoice(actions: PageActions) -> None:
    page = actions.page
    timeout = actions.settings.action_timeout_ms
    save = page.get_by_role("button", name=SAVE_NAME).first
    await save.wait_for(state="visible", timeout=timeout)
    await save.click(timeout=timeout)
    await page.wait_for_load_state("networkidle", timeout=timeout)


async def create_invoice(actions: PageActions, draft: InvoiceDraft) -> None:
    """
    Create ``draft`` through the form and check the selected customer and the
    computed total before saving.
    """
    page = actions.page
    await open_invoice_form(actions)
    await fill_invoice_form(actions, draft)

    await expect(page.get_by_role("combobox", name=CUSTOMER_NAME)).to_have_value(
        CUSTOMER_SELECTED, timeout=actions.settings.expect_timeout_ms
    )

    await expect(
        page.get_by_role("cell", name=money_pattern(draft.total)).first
    ).to_be_visible(timeout=actions.settings.expect_timeout_ms)

    await save_invoice(actions)


async def delete_invoice_row(actions: PageActions, row: Locator) -> bool:
    return await delete_row_via_menu(actions, row)


async def _fill_by_label(page, label: str, value: str, index: int, timeout: int) -> None:
    field = page.get_by_label(re.compile(label, re.IGNORECASE)).nth(index)
    await field.wait_for(state="visible", timeout=timeout)
    await field.fill(value, timeout=timeout)
