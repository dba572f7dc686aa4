"""Lead-capture request models"""

from typing import Literal, Optional, get_args

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
QUOTE_PHONE_PATTERN = r"^\+91\d{10}$"
INQUIRY_PHONE_PATTERN = r"^\+?\d{10,12}$"

ProductLine = Literal["Bitumen", "Gabion", "Construct"]
InquiryPurpose = Literal["Tender", "Site Use", "Resale", "Other"]

PRODUCT_LINES: tuple[str, ...] = get_args(ProductLine)
INQUIRY_PURPOSES: tuple[str, ...] = get_args(InquiryPurpose)


class QuoteForm(BaseModel):
    """Quote request as submitted by the quote dialog"""
    customer_name: str = Field(alias="customerName", min_length=3)
    customer_email: str = Field(alias="customerEmail", pattern=EMAIL_PATTERN)
    customer_phone: str = Field(alias="customerPhone", pattern=QUOTE_PHONE_PATTERN)
    city: str = Field(min_length=3)
    selected_products: list[ProductLine] = Field(alias="selectedProducts", min_length=1)

    class Config:
        populate_by_name = True


class InquiryForm(BaseModel):
    """Inquiry as submitted by the contact page"""
    customer_name: str = Field(alias="customerName", min_length=3)
    customer_email: str = Field(alias="customerEmail", pattern=EMAIL_PATTERN)
    customer_phone: str = Field(alias="customerPhone", pattern=INQUIRY_PHONE_PATTERN)
    company_name: str = Field(alias="companyName", min_length=3)
    city: str = Field(min_length=3)
    purpose: InquiryPurpose
    selected_products: list[ProductLine] = Field(alias="selectedProducts", min_length=1)
    consent: bool
    description: Optional[str] = Field(default=None, min_length=3, max_length=1000)

    class Config:
        populate_by_name = True

    @field_validator("consent")
    @classmethod
    def consent_given(cls, value: bool) -> bool:
        if not value:
            raise ValueError("You must consent to data processing")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value):
        # An empty description is the same as none at all
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SubscribeForm(BaseModel):
    """Newsletter signup"""
    email: str = Field(pattern=EMAIL_PATTERN)

    @field_validator("email", mode="before")
    @classmethod
    def email_present(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("Please enter an email address.")
        return value.strip() if isinstance(value, str) else value
