from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from shortener_app.schemas.url import ErrorResponse
from shortener_app.services.url_service import URLService
from shortener_app.dependencies import get_url_service, get_code

router = APIRouter(tags=["redirect"])


@router.get(
    "/{code}",
    status_code=status.HTTP_302_FOUND,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def redirect_to_original_url(
    code: str = Depends(get_code),
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    Flow:
    1. Resolve the code (cache first, store on a miss)
    2. Record the click (best-effort, never fails the redirect)
    3. 302 to the original URL

    expires_at is not checked, expired links still redirect.
    """
    original_url = await url_service.get_original_url(code)
    await url_service.record_click(code)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
