"""Unit tests for lead-capture validation and submission"""

from unittest.mock import AsyncMock
from urllib.parse import unquote

import pytest
from pydantic import ValidationError

from storefront.models.leads import QuoteForm, InquiryForm, SubscribeForm
from storefront.services.catalog_client import CatalogApiError
from storefront.services.forms import (
    FormValidationError,
    parse_quote,
    parse_inquiry,
    parse_subscription,
)
from storefront.services.leads import LeadService, DUPLICATE_SUBSCRIBER_MESSAGE


def errors_for(parse, data) -> dict:
    """Field errors reported for data, or {} when it parses"""
    try:
        parse(data)
    except FormValidationError as e:
        return e.errors
    return {}


VALID_QUOTE = {
    "customerName": "Asha Verma",
    "customerEmail": "asha@roadworks.in",
    "customerPhone": "+919876543210",
    "city": "Mathura",
    "selectedProducts": ["Bitumen"],
}

VALID_INQUIRY = {
    "customerName": "Asha Verma",
    "customerEmail": "asha@roadworks.in",
    "customerPhone": "9876543210",
    "companyName": "Roadworks Ltd",
    "city": "Agra",
    "purpose": "Tender",
    "selectedProducts": ["Gabion", "Construct"],
    "consent": True,
    "description": "",
}


class TestQuoteValidation:

    def test_valid_quote(self):
        assert errors_for(parse_quote, VALID_QUOTE) == {}

    def test_empty_quote_reports_every_field(self):
        errors = errors_for(parse_quote, {})
        assert set(errors) == {
            "customerName",
            "customerEmail",
            "customerPhone",
            "city",
            "selectedProducts",
        }

    @pytest.mark.parametrize("phone", ["9876543210", "+91987654321", "+9298765432100", "+91 9876543210"])
    def test_phone_must_be_indian_mobile(self, phone):
        errors = errors_for(parse_quote, {**VALID_QUOTE, "customerPhone": phone})
        assert errors == {"customerPhone": "Phone number must be in the format +91 followed by 10 digits"}

    def test_short_name(self):
        errors = errors_for(parse_quote, {**VALID_QUOTE, "customerName": "Al"})
        assert "customerName" in errors

    def test_unknown_product_line(self):
        errors = errors_for(parse_quote, {**VALID_QUOTE, "selectedProducts": ["Asphalt"]})
        assert errors == {"selectedProducts": "Products must be among: Bitumen, Gabion, Construct"}

    def test_no_products_selected(self):
        errors = errors_for(parse_quote, {**VALID_QUOTE, "selectedProducts": []})
        assert errors == {"selectedProducts": "At least one product must be selected"}


class TestInquiryValidation:

    def test_valid_inquiry(self):
        assert errors_for(parse_inquiry, VALID_INQUIRY) == {}

    @pytest.mark.parametrize("phone", ["+919876543210", "987654321012"])
    def test_phone_accepts_ten_to_twelve_digits(self, phone):
        assert errors_for(parse_inquiry, {**VALID_INQUIRY, "customerPhone": phone}) == {}

    def test_consent_required(self):
        errors = errors_for(parse_inquiry, {**VALID_INQUIRY, "consent": False})
        assert errors == {"consent": "You must consent to data processing"}

    def test_purpose_must_be_known(self):
        errors = errors_for(parse_inquiry, {**VALID_INQUIRY, "purpose": "Curiosity"})
        assert errors == {"purpose": "Purpose of request is required"}

    @pytest.mark.parametrize("description", ["ok", "x" * 1001])
    def test_description_length(self, description):
        errors = errors_for(parse_inquiry, {**VALID_INQUIRY, "description": description})
        assert errors == {"description": "Description must be between 3 and 1000 characters"}

    def test_description_is_optional(self):
        assert errors_for(parse_inquiry, {**VALID_INQUIRY, "description": ""}) == {}


class TestSubscriptionValidation:

    def test_missing_email(self):
        assert errors_for(parse_subscription, {}) == {"email": "Please enter an email address."}

    def test_blank_email(self):
        assert errors_for(parse_subscription, {"email": "  "}) == {"email": "Please enter an email address."}

    def test_malformed_email(self):
        assert "email" in errors_for(parse_subscription, {"email": "not-an-email"})

    def test_valid_email(self):
        assert errors_for(parse_subscription, {"email": "buyer@site.com"}) == {}


class TestFormModels:

    def test_quote_model_rejects_invalid_input(self):
        with pytest.raises(ValidationError):
            QuoteForm(customerName="", customerEmail="a@b.co", customerPhone="+919876543210",
                      city="Agra", selectedProducts=["Bitumen"])

    def test_inquiry_blank_description_becomes_none(self):
        form = InquiryForm.model_validate({**VALID_INQUIRY, "description": "   "})
        assert form.description is None

    def test_inquiry_requires_consent(self):
        with pytest.raises(ValidationError):
            InquiryForm.model_validate({**VALID_INQUIRY, "consent": False})

    def test_subscription_email_is_stripped(self):
        assert SubscribeForm(email=" buyer@site.com ").email == "buyer@site.com"


@pytest.fixture
def api_client():
    client = AsyncMock()
    client.create_quote.return_value = {"_id": "q1"}
    client.create_inquiry.return_value = {"_id": "i1"}
    client.subscribe.return_value = {"_id": "s1"}
    return client


@pytest.fixture
def lead_service(api_client):
    return LeadService(api_client, whatsapp_number="9528355555")


class TestLeadService:

    @pytest.mark.asyncio
    async def test_invalid_quote_is_not_sent(self, lead_service, api_client):
        with pytest.raises(FormValidationError) as exc_info:
            await lead_service.submit_quote({**VALID_QUOTE, "city": ""})

        assert exc_info.value.errors == {"city": "City is required and must be at least 3 characters"}
        api_client.create_quote.assert_not_called()

    @pytest.mark.asyncio
    async def test_quote_submission(self, lead_service, api_client):
        result = await lead_service.submit_quote(VALID_QUOTE)

        api_client.create_quote.assert_awaited_once_with(VALID_QUOTE)
        assert result.record == {"_id": "q1"}
        assert result.share_url.startswith("https://wa.me/9528355555?text=")
        text = unquote(result.share_url.split("text=", 1)[1])
        assert "Name: Asha Verma" in text
        assert "Products: Bitumen" in text

    @pytest.mark.asyncio
    async def test_inquiry_drops_empty_description(self, lead_service, api_client):
        await lead_service.submit_inquiry(VALID_INQUIRY)

        payload = api_client.create_inquiry.await_args.args[0]
        assert "description" not in payload
        assert payload["companyName"] == "Roadworks Ltd"
        assert payload["consent"] is True

    @pytest.mark.asyncio
    async def test_inquiry_keeps_description(self, lead_service, api_client):
        await lead_service.submit_inquiry({**VALID_INQUIRY, "description": "Need 40 drums of VG-30"})

        payload = api_client.create_inquiry.await_args.args[0]
        assert payload["description"] == "Need 40 drums of VG-30"

    @pytest.mark.asyncio
    async def test_invalid_inquiry_is_not_sent(self, lead_service, api_client):
        with pytest.raises(FormValidationError):
            await lead_service.submit_inquiry({**VALID_INQUIRY, "consent": False})

        api_client.create_inquiry.assert_not_called()

    @pytest.mark.asyncio
    async def test_subscribe(self, lead_service, api_client):
        result = await lead_service.subscribe({"email": " buyer@site.com "})

        api_client.subscribe.assert_awaited_once_with("buyer@site.com")
        assert "buyer@site.com" in result.message

    @pytest.mark.asyncio
    async def test_duplicate_subscriber(self, lead_service, api_client):
        api_client.subscribe.side_effect = CatalogApiError("E11000 duplicate key error", 400)

        with pytest.raises(CatalogApiError) as exc_info:
            await lead_service.subscribe({"email": "buyer@site.com"})

        assert exc_info.value.message == DUPLICATE_SUBSCRIBER_MESSAGE

    @pytest.mark.asyncio
    async def test_other_subscribe_errors_pass_through(self, lead_service, api_client):
        api_client.subscribe.side_effect = CatalogApiError("Failed to subscribe", 500)

        with pytest.raises(CatalogApiError) as exc_info:
            await lead_service.subscribe({"email": "buyer@site.com"})

        assert exc_info.value.message == "Failed to subscribe"
