"""
Tests for the vendor REST client.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from hellobooks_e2e.api.vendors import (
    DELETE_OK_STATUSES,
    ApiResponse,
    VendorsApi,
    extract_vendor_id,
)
from hellobooks_e2e.error_handling import ApiResponseError


def _response(status=200, json_body=None, text=""):
    response = MagicMock(name="APIResponse")
    response.status = status
    if json_body is None:
        response.json = AsyncMock(side_effect=ValueError("not json"))
    else:
        response.json = AsyncMock(return_value=json_body)
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def request_context():
    context = MagicMock(name="APIRequestContext")
    context.fetch = AsyncMock()
    return context


class TestExtractVendorId:

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://dev.hellobooks.ai/vendor-info/abc123", "abc123"),
            ("https://dev.hellobooks.ai/Vendor-Info/abc123?tab=bills", "abc123"),
            ("https://dev.hellobooks.ai/edit-vendor/77#top", "77"),
            ("https://dev.hellobooks.ai/payees", None),
        ],
    )
    def test_extract(self, url, expected):
        assert extract_vendor_id(url) == expected


class TestApiResponse:

    def test_body_text(self):
        assert ApiResponse(url="u", status=204).body_text == ""
        assert ApiResponse(url="u", status=200, body="Deleted").body_text == "Deleted"
        assert ApiResponse(url="u", status=200, body={"ok": True}).body_text == '{"ok": true}'

    @pytest.mark.parametrize(
        "body, expected",
        [
            (None, True),
            ("", True),
            ({"message": "Vendor deleted"}, True),
            ({"status": "SUCCESS"}, True),
            ("OK", True),
            ({"error": "forbidden"}, False),
        ],
    )
    def test_indicates_success(self, body, expected):
        assert ApiResponse(url="u", status=200, body=body).indicates_success() is expected

    def test_bare_no_content_counts_as_success(self):
        response = ApiResponse(url="u", status=204, body="")

        assert response.expect_status(200, 204).indicates_success() is True


class TestVendorsApi:

    def test_vendor_url(self, request_context):
        api = VendorsApi(request_context, "https://dev.hellobooks.ai/")
        assert api.vendor_url("42") == "https://dev.hellobooks.ai/api/vendors/42"

    @pytest.mark.asyncio
    async def test_delete_json_body(self, request_context):
        request_context.fetch.return_value = _response(200, {"message": "deleted"})
        api = VendorsApi(request_context, "https://dev.hellobooks.ai")

        result = await api.delete("42")

        request_context.fetch.assert_awaited_once_with(
            "https://dev.hellobooks.ai/api/vendors/42", method="DELETE"
        )
        assert result.status in DELETE_OK_STATUSES
        assert result.body == {"message": "deleted"}
        assert result.indicates_success()

    @pytest.mark.asyncio
    async def test_get_text_body(self, request_context):
        request_context.fetch.return_value = _response(404, text="Not Found")
        api = VendorsApi(request_context, "https://dev.hellobooks.ai")

        result = await api.get("42")

        assert request_context.fetch.await_args.kwargs == {"method": "GET"}
        assert result.status == 404
        assert result.body == "Not Found"

    @pytest.mark.asyncio
    async def test_delete_no_content(self, request_context):
        request_context.fetch.return_value = _response(204)
        api = VendorsApi(request_context, "https://dev.hellobooks.ai")

        result = await api.delete("42")

        assert result.status == 204
        assert result.body_text == ""
        assert result.indicates_success()

    def test_expect_status(self):
        response = ApiResponse(url="https://dev.hellobooks.ai/api/vendors/42", status=204)
        assert response.expect_status(*DELETE_OK_STATUSES) is response

    def test_expect_status_mismatch(self):
        response = ApiResponse(
            url="https://dev.hellobooks.ai/api/vendors/42", status=200, body={"id": "42"}
        )

        with pytest.raises(ApiResponseError, match="Expected status 404, got 200") as exc_info:
            response.expect_status(404)

        assert exc_info.value.status == 200
        assert exc_info.value.body == {"id": "42"}
