"""
Steps shared by the list pages: landing checks, row menus and dialogs.
"""

import re
from decimal import Decimal
from typing import Pattern

from playwright.async_api import Locator, expect

from hellobooks_e2e.auth.login import LOGIN_URL_PATTERN
from hellobooks_e2e.ui import selectors
from hellobooks_e2e.ui.actions import SOFT_FAILURES, PageActions

# A redirect to /login shows up well before the page's own timeouts
LOGIN_REDIRECT_TIMEOUT_MS = 20000
DIALOG_TIMEOUT_MS = 10000

DELETE_NAME = re.compile(r"delete|remove", re.IGNORECASE)
CONFIRM_NAME = re.compile(r"delete|confirm|yes", re.IGNORECASE)
CANCEL_NAME = re.compile(r"cancel|no|close|keep", re.IGNORECASE)
DELETED_TOAST = re.compile(r"deleted|success|removed", re.IGNORECASE)
SAVED_TOAST = re.compile(r"success|created|saved", re.IGNORECASE)


def money_pattern(amount: Decimal) -> Pattern[str]:
    """Match an amount as the app prints it, with or without trailing zeros."""
    text = format(amount.normalize(), "f")
    return re.compile(re.escape(text))


async def goto_list(actions: PageActions, path: str) -> None:
    """Open a list page and fail fast if the session was lost."""
    page = actions.page
    await page.goto(actions.settings.url_for(path))
    await actions.wait_for_page_ready(path)
    await expect(page).not_to_have_url(
        LOGIN_URL_PATTERN, timeout=LOGIN_REDIRECT_TIMEOUT_MS
    )


async def delete_row_via_menu(actions: PageActions, row: Locator) -> bool:
    """
    Open the row's action menu, pick Delete and confirm the dialog.

    Returns:
        True if the confirm button was clicked
    """
    page = actions.page
    trigger = row.locator(selectors.ROW_ACTION_TRIGGER).first
    await actions.optional_action(
        trigger, trigger.click, "Row actions menu button not found"
    )

    delete_item = page.get_by_role("menuitem", name=DELETE_NAME).first
    await actions.optional_action(
        delete_item, delete_item.click, "Delete menu item not found in context menu"
    )

    return await confirm_dialog(actions)


async def confirm_dialog(actions: PageActions) -> bool:
    """Click the confirming button of the open dialog, if one opens."""
    dialog = actions.page.get_by_role("dialog").first
    if not await actions.safe_expect_visible(
        dialog, "Delete confirmation dialog not visible", DIALOG_TIMEOUT_MS
    ):
        return False

    confirm = (
        dialog.get_by_role("button", name=CONFIRM_NAME)
        .filter(has_not_text=re.compile(r"cancel", re.IGNORECASE))
        .first
    )
    return await actions.optional_action(
        confirm, confirm.click, "Confirm delete button not found in dialog"
    )


async def cancel_dialog(actions: PageActions) -> bool:
    """
    Dismiss the open dialog with its cancel button.

    Returns:
        True if the dialog closed
    """
    dialog = actions.page.get_by_role("dialog").first
    if not await actions.safe_expect_visible(
        dialog, "Confirmation dialog did not appear", DIALOG_TIMEOUT_MS
    ):
        return False

    cancel = dialog.get_by_role("button", name=CANCEL_NAME).first
    await actions.optional_action(
        cancel, cancel.click, "Cancel button not found in confirmation dialog"
    )
    try:
        await dialog.wait_for(state="hidden", timeout=DIALOG_TIMEOUT_MS)
        return True
    except SOFT_FAILURES:
        actions.note("Dialog did not close after cancel")
        return False


async def verify_row_removed(
    actions: PageActions,
    identifier: str,
    label: str,
    timeout: int = 15000,
) -> bool:
    """Wait until no row mentions ``identifier``; note it otherwise."""
    if not identifier:
        actions.note(f"Could not capture {label} identifier for verification")
        return False
    remaining = actions.rows_matching(identifier).first
    try:
        await expect(remaining).to_have_count(0, timeout=timeout)
        return True
    except AssertionError:
        actions.note(f'{label.capitalize()} "{identifier}" still appears in list after deletion')
        return False
