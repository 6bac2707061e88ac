"""
FastAPI Endpoints for URL Shortener Service

This module defines the REST API endpoints with minimal logic.
Endpoints only handle:
- Reading the submitted URL from a form or JSON body
- Mapping service exceptions to the public responses
- Delegating to the service layer

Rejected URLs are answered with 200 {"error": "invalid url"}, matching the
public contract; unknown codes get 404 with the requested code echoed back.
Storage and code generation failures are left to the application-level
exception handlers in shorturl.main.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from shorturl.api.schemas import (
    ErrorResponse,
    HelloResponse,
    NotFoundResponse,
    ShortenRequest,
    ShortenResponse,
)
from shorturl.core.exceptions import InvalidURLError, ShortCodeNotFoundError
from shorturl.core.registry_manager import get_reachability_checker, get_registry
from shorturl.services.reachability import ReachabilityChecker
from shorturl.services.redirect_service import RedirectService
from shorturl.services.registry import URLRegistry
from shorturl.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

INVALID_URL = "invalid url"
NOT_FOUND = "Short URL not found"

router = APIRouter(prefix="/api")


async def read_submitted_url(request: Request) -> Optional[str]:
    """
    Extract the "url" field from a JSON, urlencoded or multipart body.

    Returns:
        The submitted value, or None when it is missing or not a string
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = ShortenRequest.model_validate(await request.json())
        except (ValueError, ValidationError):
            return None
        return body.url

    try:
        form = await request.form()
    except (HTTPException, MultiPartException) as e:
        # Malformed multipart body, e.g. no boundary
        logger.info(f"Unreadable form body: {e}")
        return None
    value = form.get("url")
    return value if isinstance(value, str) else None


@router.post(
    "/shorturl",
    response_model=Union[ShortenResponse, ErrorResponse],
    summary="Create a short URL",
    description="Takes a URL and returns its numeric short code"
)
async def create_short_url(
    request: Request,
    registry: URLRegistry = Depends(get_registry),
    reachability: ReachabilityChecker = Depends(get_reachability_checker),
):
    """
    Create a short URL, or return the existing one for a known URL.

    Returns:
        ShortenResponse with original_url and short_url, or
        ErrorResponse("invalid url") when the URL is empty, malformed or
        its host does not resolve
    """
    raw_url = await read_submitted_url(request)
    url_service = URLShorteningService(registry, reachability)

    try:
        entry = await url_service.shorten(raw_url or "")
    except InvalidURLError as e:
        logger.info(f"Rejected URL: {e}")
        return ErrorResponse(error=INVALID_URL)

    return ShortenResponse(**entry.to_record())


@router.get(
    "/shorturl/{short_code}",
    status_code=status.HTTP_302_FOUND,
    responses={status.HTTP_404_NOT_FOUND: {"model": NotFoundResponse}},
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original URL"
)
async def redirect_to_url(
    short_code: str,
    registry: URLRegistry = Depends(get_registry),
):
    """
    Redirect to the original URL for a given short code.

    Returns:
        RedirectResponse (HTTP 302) to original URL, or 404 with the code
    """
    redirect_service = RedirectService(registry)

    try:
        original_url = await redirect_service.get_redirect_url(short_code)
    except ShortCodeNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=NotFoundResponse(error=NOT_FOUND, short=e.short_code).model_dump(),
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)


@router.get("/hello", response_model=HelloResponse)
async def hello():
    return HelloResponse(greeting="hello API")
