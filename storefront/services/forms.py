"""
Lead-capture form parsing

The rules live on the pydantic form models. This module turns their
validation errors into a mapping of field name to message, which is what
the forms display next to each input.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..models.leads import QuoteForm, InquiryForm, SubscribeForm, PRODUCT_LINES

FormT = TypeVar("FormT", bound=BaseModel)

_NAME = "Full name is required and must be at least 3 characters"
_EMAIL = "A valid email address is required"
_CITY = "City is required and must be at least 3 characters"
_PRODUCTS = "At least one product must be selected"
_PRODUCT_CHOICE = f"Products must be among: {', '.join(PRODUCT_LINES)}"

# Keyed by field alias, or "<alias>.<error type>" for a type-specific message
QUOTE_MESSAGES = {
    "customerName": _NAME,
    "customerEmail": _EMAIL,
    "customerPhone": "Phone number must be in the format +91 followed by 10 digits",
    "city": _CITY,
    "selectedProducts": _PRODUCTS,
    "selectedProducts.literal_error": _PRODUCT_CHOICE,
}

INQUIRY_MESSAGES = {
    "customerName": _NAME,
    "customerEmail": _EMAIL,
    "customerPhone": "Phone number must be 10-12 digits, optionally starting with +",
    "companyName": "Company name is required and must be at least 3 characters",
    "city": _CITY,
    "purpose": "Purpose of request is required",
    "selectedProducts": _PRODUCTS,
    "selectedProducts.literal_error": _PRODUCT_CHOICE,
    "consent": "You must consent to data processing",
    "description": "Description must be between 3 and 1000 characters",
}

SUBSCRIBE_MESSAGES = {
    "email": _EMAIL,
    "email.missing": "Please enter an email address.",
}


class FormValidationError(ValueError):
    """Raised when a submitted form has field errors"""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def field_errors(error: ValidationError, messages: dict[str, str]) -> dict[str, str]:
    """Collapse pydantic errors to the first message per field"""
    errors: dict[str, str] = {}
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else "form"
        if field in errors:
            continue
        if item["type"] == "value_error":
            errors[field] = str(item["ctx"]["error"])
        else:
            errors[field] = (
                messages.get(f"{field}.{item['type']}")
                or messages.get(field)
                or item["msg"]
            )
    return errors


def parse_form(model: type[FormT], data: Any, messages: dict[str, str]) -> FormT:
    """Validate submitted data into a form model"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise FormValidationError(field_errors(e, messages)) from e


def parse_quote(data: Any) -> QuoteForm:
    return parse_form(QuoteForm, data, QUOTE_MESSAGES)


def parse_inquiry(data: Any) -> InquiryForm:
    return parse_form(InquiryForm, data, INQUIRY_MESSAGES)


def parse_subscription(data: Any) -> SubscribeForm:
    return parse_form(SubscribeForm, data, SUBSCRIBE_MESSAGES)
