"""Lead-capture routes: quote requests, inquiries, newsletter"""

import logging
from typing import Awaitable, Callable

import httpx
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ..services.catalog_client import CatalogApiError
from ..services.forms import FormValidationError
from ..services.leads import LeadService, LeadResult
from .deps import get_lead_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Leads"])


async def _submit(action: Callable[[], Awaitable[LeadResult]], failure: str) -> JSONResponse:
    """Run a submission and map its failures to responses"""
    try:
        result = await action()
    except FormValidationError as e:
        return JSONResponse(status_code=422, content={"errors": e.errors})
    except CatalogApiError as e:
        return JSONResponse(status_code=502, content={"message": e.message})
    except httpx.HTTPError as e:
        logger.warning(f"{failure}: {e}")
        return JSONResponse(status_code=502, content={"message": failure})

    return JSONResponse(
        status_code=201,
        content={
            "message": result.message,
            "data": result.record,
            "shareUrl": result.share_url,
        },
    )


@router.post("/quotes")
async def create_quote(
    payload: dict = Body(...),
    leads: LeadService = Depends(get_lead_service),
):
    """Submit a quote request"""
    return await _submit(lambda: leads.submit_quote(payload), "Failed to submit quote request")


@router.post("/inquiries")
async def create_inquiry(
    payload: dict = Body(...),
    leads: LeadService = Depends(get_lead_service),
):
    """Submit a contact inquiry"""
    return await _submit(
        lambda: leads.submit_inquiry(payload),
        "Failed to submit inquiry. Please try again.",
    )


@router.post("/subscribe")
async def subscribe(
    payload: dict = Body(...),
    leads: LeadService = Depends(get_lead_service),
):
    """Subscribe to the newsletter"""
    return await _submit(lambda: leads.subscribe(payload), "Failed to subscribe. Please try again.")
