from fastapi import APIRouter, Depends, status
from shortener_app.schemas.url import URLStats, ErrorResponse
from shortener_app.services.url_service import URLService
from shortener_app.dependencies import get_url_service, get_code

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)


@router.get("/{code}", response_model=URLStats)
async def get_url_stats(
    code: str = Depends(get_code),
    url_service: URLService = Depends(get_url_service)
):
    """Get click statistics for a short URL"""
    return await url_service.get_url_stats(code)
