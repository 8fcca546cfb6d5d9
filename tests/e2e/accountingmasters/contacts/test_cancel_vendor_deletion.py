"""
Accounting Masters: cancelling a vendor deletion keeps the vendor.
"""

import re

import pytest

from hellobooks_e2e.ui import selectors
from hellobooks_e2e.workflows import vendors

pytestmark = [pytest.mark.e2e, pytest.mark.timeout(120)]

DELETION_TOAST = re.compile(r"deleted|removed", re.IGNORECASE)


@pytest.mark.testcase("Tt8qy69z1", suite="Accounting Masters", tags=("vendors",))
@pytest.mark.asyncio
async def test_cancel_vendor_deletion(logged_in_page, actions):
    """Cancel Vendor Deletion"""
    page = logged_in_page

    await vendors.open_vendor_list(actions)
    await vendors.select_vendors_tab(actions)

    table_visible = await actions.safe_expect_visible(
        page.locator(selectors.TABLE).first, "Vendors list not visible"
    )
    if not table_visible:
        return

    row = await actions.first_row()
    if row is None:
        actions.note("No vendor row found to delete")
        return

    vendor_name = await actions.cell_text(row)
    await actions.optional_action(row, row.click, "Vendor row not selectable")

    if not await vendors.trigger_row_delete(actions, row):
        return

    await vendors.cancel_vendor_delete(actions)

    if vendor_name:
        await actions.safe_expect_visible(
            actions.rows_matching(vendor_name).first,
            "Vendor row not found after canceling deletion",
            10000,
        )
    else:
        any_row = await actions.first_row()
        if any_row is None:
            actions.note("No vendor rows available after cancel")
        else:
            await actions.safe_expect_visible(
                any_row, "Vendor list empty after canceling deletion"
            )

    if await actions.wait_for_toast(DELETION_TOAST, 3000):
        actions.note("Unexpected deletion toast appeared")
