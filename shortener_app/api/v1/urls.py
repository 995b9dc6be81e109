from fastapi import APIRouter, Depends, status
from shortener_app.schemas.url import (
    ShortenRequest,
    UpdateRequest,
    ShortenResponse,
    URLRecord,
    URLList,
    DeleteResponse,
    ErrorResponse,
)
from shortener_app.services.url_service import URLService
from shortener_app.dependencies import get_url_service, get_code

router = APIRouter(
    tags=["urls"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
async def shorten_url(
    payload: ShortenRequest,
    url_service: URLService = Depends(get_url_service)
):
    """Create a new short URL, optionally with a custom code and expiration"""
    record = await url_service.create_short_url(
        payload.url,
        code=payload.code,
        expires_in=payload.expires_in,
    )
    return ShortenResponse(code=record.code, original_url=record.original_url)


@router.get("/urls", response_model=URLList)
async def list_urls(url_service: URLService = Depends(get_url_service)):
    """List the most recent short URLs (newest first, at most 100)"""
    return {"urls": await url_service.list_urls()}


@router.get("/urls/{code}", response_model=URLRecord)
async def get_url(
    code: str = Depends(get_code),
    url_service: URLService = Depends(get_url_service)
):
    """Get the full record of a short URL"""
    return await url_service.get_url(code)


@router.put("/urls/{code}", response_model=ShortenResponse)
async def update_url(
    payload: UpdateRequest,
    code: str = Depends(get_code),
    url_service: URLService = Depends(get_url_service)
):
    """Point a short URL at a new destination"""
    return await url_service.update_url(code, payload.url)


@router.delete("/urls/{code}", response_model=DeleteResponse)
async def delete_url(
    code: str = Depends(get_code),
    url_service: URLService = Depends(get_url_service)
):
    """Delete a short URL and invalidate its cache entry"""
    await url_service.delete_url(code)
    return DeleteResponse()
