"""
FastAPI Endpoints for the URL Shortener Service

Endpoints only handle:
- Request validation (Pydantic models)
- Error handling and HTTP responses
- Delegating to the allocator and resolver

Error mapping:
- InvalidInputError -> 400
- unknown code -> 404
- AllocationExhaustedError -> 500
- StorageError -> 503
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from tinyurl.api.schemas import ResolveResponse, ShortenRequest, ShortenResponse
from tinyurl.core.exceptions import AllocationExhaustedError, InvalidInputError, StorageError
from tinyurl.services.allocator import Allocator
from tinyurl.services.resolver import Resolver

logger = logging.getLogger(__name__)

router = APIRouter()


def get_allocator(request: Request) -> Allocator:
    return request.app.state.services.allocator


def get_resolver(request: Request) -> Resolver:
    return request.app.state.services.resolver


def build_short_url(request: Request, code: str) -> str:
    base_url = request.app.state.settings.BASE_URL.rstrip("/")
    return f"{base_url}/{code}"


async def lookup_or_404(resolver: Resolver, code: str) -> str:
    """Resolve a code, mapping notFound and store failures to HTTP errors."""
    try:
        url = await resolver.resolve(code)
    except StorageError as e:
        logger.error(f"Failed to resolve {code!r}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is unavailable, try again later"
        )

    if url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{code}' not found"
        )
    return url


@router.post(
    "/",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short URL",
    description="Takes a long URL and returns a unique short code for it"
)
@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_short_url(
    request: Request,
    body: ShortenRequest,
    allocator: Allocator = Depends(get_allocator),
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Raises:
        HTTPException 400: If the URL is rejected
        HTTPException 500: If no free code could be allocated
        HTTPException 503: If the store fails
    """
    try:
        code = await allocator.shorten(body.url)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except AllocationExhaustedError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    except StorageError as e:
        logger.error(f"Failed to shorten URL: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is unavailable, try again later"
        )

    return ShortenResponse(code=code, short_url=build_short_url(request, code))


@router.get(
    "/resolve/{code}",
    response_model=ResolveResponse,
    summary="Resolve a short code",
    description="Returns the original URL for a short code without redirecting"
)
async def resolve_code(
    code: str,
    resolver: Resolver = Depends(get_resolver),
) -> ResolveResponse:
    url = await lookup_or_404(resolver, code)
    return ResolveResponse(code=code, url=url)


@router.get(
    "/{code}",
    status_code=status.HTTP_308_PERMANENT_REDIRECT,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
async def redirect_to_url(
    code: str,
    resolver: Resolver = Depends(get_resolver),
) -> RedirectResponse:
    """
    Redirect to the original URL for a given short code.

    Raises:
        HTTPException 404: If short code not found
        HTTPException 503: If the store fails
    """
    url = await lookup_or_404(resolver, code)
    return RedirectResponse(
        url=url,
        status_code=status.HTTP_308_PERMANENT_REDIRECT
    )
