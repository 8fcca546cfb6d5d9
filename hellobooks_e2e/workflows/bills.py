"""
Purchase bill flows: list, create as draft, delete.
"""

import re

from playwright.async_api import Locator

from hellobooks_e2e.data.models import BillDraft
from hellobooks_e2e.ui import selectors
from hellobooks_e2e.ui.actions import PageActions
from hellobooks_e2e.workflows.common import (
    delete_row_via_menu,
    goto_list,
    money_pattern,
)

BILL_LIST_PATH = "/list-bills"
CREATE_BILL_ROUTE = "/create-bills"

NEW_BILL_NAME = re.compile(r"new bill|create bill|add bill", re.IGNORECASE)
SAVE_DRAFT_NAME = re.compile(r"save draft|save as draft", re.IGNORECASE)
DRAFT_STATUS = re.compile(r"draft", re.IGNORECASE)

# Any non-empty option name
FIRST_OPTION = ".+"


async def open_bill_list(actions: PageActions) -> None:
    await goto_list(actions, BILL_LIST_PATH)


async def open_bill_form(actions: PageActions) -> None:
    """Click New Bill; the create route check is strict."""
    await actions.click_button(NEW_BILL_NAME, "New Bill button not found")
    await actions.wait_for_page_ready(CREATE_BILL_ROUTE)


async def fill_bill_form(actions: PageActions, draft: BillDraft) -> None:
    """Fill the header and every line; controls the form lacks are noted."""
    await actions.select_option(
        selectors.BILL_VENDOR,
        re.escape(draft.vendor) if draft.vendor else FIRST_OPTION,
        "Vendor",
    )
    await actions.fill_field(selectors.BILL_NUMBER, draft.bill_number, "Bill Number")
    await actions.fill_field(
        selectors.BILL_ISSUE_DATE, draft.issue_date.isoformat(), "Issue Date"
    )
    await actions.fill_field(
        selectors.BILL_DUE_DATE, draft.due_date.isoformat(), "Due Date"
    )

    page = actions.page
    for index, line in enumerate(draft.lines):
        await _fill_line_field(
            actions, selectors.LINE_DESCRIPTION, index, line.description, "Line Description"
        )
        await _fill_line_field(
            actions, selectors.LINE_QUANTITY, index, str(line.quantity), "Line Quantity"
        )
        await _fill_line_field(
            actions, selectors.LINE_RATE, index, str(line.rate), "Line Rate"
        )
        if draft.tax_rate:
            await actions.select_option(selectors.LINE_TAX, re.escape(draft.tax_rate), "Tax Rate")
        await actions.select_option(
            selectors.LINE_ACCOUNT,
            re.escape(draft.expense_account) if draft.expense_account else FIRST_OPTION,
            "Expense Account",
        )

    await actions.safe_expect_visible(
        page.get_by_text(money_pattern(draft.subtotal)).first,
        "Bill subtotal not shown in preview",
    )


async def save_bill_draft(actions: PageActions) -> bool:
    return await actions.click_button(SAVE_DRAFT_NAME, "Save Draft button not found")


async def create_bill(actions: PageActions, draft: BillDraft) -> bool:
    """
    Create ``draft`` from the bill list and save it as a draft.

    Returns:
        True if Save Draft was clicked
    """
    await open_bill_form(actions)
    await fill_bill_form(actions, draft)
    return await save_bill_draft(actions)


async def verify_bill_listed_as_draft(actions: PageActions, draft: BillDraft) -> bool:
    """Soft check that the list shows ``draft`` with Draft status."""
    row = actions.rows_matching(draft.bill_number).first
    if not await actions.safe_expect_visible(
        row, f"Bill {draft.bill_number} not found in list", actions.settings.route_timeout_ms
    ):
        return False
    return await actions.safe_expect_visible(
        row.get_by_text(DRAFT_STATUS).first, f"Bill {draft.bill_number} not in Draft status"
    )


async def delete_bill_row(actions: PageActions, row: Locator) -> bool:
    return await delete_row_via_menu(actions, row)


async def _fill_line_field(
    actions: PageActions, selector: str, index: int, value: str, field_name: str
) -> bool:
    field = actions.page.locator(selector).nth(index)
    return await actions.optional_action(
        field, lambda: field.fill(value), f"Could not fill {field_name}"
    )

