"""Browser-facing routes: short code redirects."""

from html import escape

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

router = APIRouter()


def _error_page(title: str, message: str, status_code: int) -> HTMLResponse:
    content = (
        f"<h1>{escape(title)}</h1><p>{escape(message)}</p>"
        f"<a href='/'>Create a new short link</a>"
    )
    return HTMLResponse(content=content, status_code=status_code)


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, recording the click."""
    store = request.app.state.store
    logger = request.app.state.logger

    logger.info(f"Redirect attempt: {short_code}")

    original_url = await store.resolve(
        short_code,
        referrer=request.headers.get("referer"),
        user_agent=request.headers.get("user-agent"),
    )

    if original_url:
        # 302 so every visit comes back through here and is counted
        return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)

    if store.find_expired(short_code):
        logger.warning(f"Redirect failed - URL expired: {short_code}")
        return _error_page(
            "Link Expired",
            "This short URL has expired and is no longer valid.",
            status.HTTP_410_GONE,
        )

    logger.warning(f"Redirect failed - URL not found: {short_code}")
    return _error_page(
        "Link Not Found",
        "Short URL not found. Please check the URL and try again.",
        status.HTTP_404_NOT_FOUND,
    )
