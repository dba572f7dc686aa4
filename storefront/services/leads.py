"""
Lead Capture Service

Validates quote requests, inquiries and newsletter signups, then submits
them to the catalog API. Validation runs before any network call.
"""

import logging
from typing import Any, Optional
from dataclasses import dataclass
from urllib.parse import quote as url_quote

from ..models.leads import QuoteForm
from .catalog_client import CatalogApiClient, CatalogApiError
from .forms import parse_quote, parse_inquiry, parse_subscription

logger = logging.getLogger(__name__)

DUPLICATE_SUBSCRIBER_MESSAGE = "This email is already subscribed. Please use a different email."


@dataclass
class LeadResult:
    """Outcome of a successful submission"""
    message: str
    record: Optional[dict] = None
    share_url: Optional[str] = None


def whatsapp_share_url(number: str, form: QuoteForm) -> str:
    """Build a WhatsApp link summarising a quote request"""
    text = (
        "New Quote Request:\n\n"
        f"Name: {form.customer_name}\n"
        f"Email: {form.customer_email}\n"
        f"Phone: {form.customer_phone}\n"
        f"City: {form.city}\n"
        f"Products: {', '.join(form.selected_products)}"
    )
    return f"https://wa.me/{number}?text={url_quote(text, safe='')}"


class LeadService:
    """Submits lead-capture forms to the catalog API"""

    def __init__(self, client: CatalogApiClient, whatsapp_number: str):
        self.client = client
        self.whatsapp_number = whatsapp_number

    async def submit_quote(self, data: Any) -> LeadResult:
        """Validate and submit a quote request"""
        form = parse_quote(data)

        record = await self.client.create_quote(form.model_dump(by_alias=True))
        logger.info(f"Quote request submitted for {form.customer_email}")
        return LeadResult(
            message="Quote request submitted successfully! Our team will respond within 24 hours.",
            record=record,
            share_url=whatsapp_share_url(self.whatsapp_number, form),
        )

    async def submit_inquiry(self, data: Any) -> LeadResult:
        """Validate and submit a contact inquiry"""
        form = parse_inquiry(data)

        record = await self.client.create_inquiry(form.model_dump(by_alias=True, exclude_none=True))
        logger.info(f"Inquiry submitted for {form.company_name}")
        return LeadResult(
            message="Thank you for your inquiry! Our team will get back to you shortly.",
            record=record,
        )

    async def subscribe(self, data: Any) -> LeadResult:
        """Validate and register a newsletter subscription"""
        form = parse_subscription(data)

        try:
            record = await self.client.subscribe(form.email)
        except CatalogApiError as e:
            if "11000" in e.message:
                raise CatalogApiError(DUPLICATE_SUBSCRIBER_MESSAGE, e.status_code) from e
            raise

        logger.info("Newsletter subscription added")
        return LeadResult(
            message=f"Thank you, {form.email}! You have successfully subscribed to our newsletter.",
            record=record,
        )
