"""
Domain exception handler.

Maps BoutiqueException codes to HTTP status codes and renders the
`{"error": <code>, "message": <text>}` body the storefront expects.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from boutique.domain.exceptions import BoutiqueException
from boutique.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

STATUS_BY_CODE = {
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_DATA": status.HTTP_400_BAD_REQUEST,
    "NOT_ALLOWED": status.HTTP_403_FORBIDDEN,
}


async def boutique_exception_handler(
    request: Request, exc: BoutiqueException
) -> JSONResponse:
    """Render a domain exception; unknown codes are server errors."""
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected with {exc.code}: "
            f"{exc.message}"
        )

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )
