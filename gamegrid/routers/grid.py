import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from gamegrid.domain.grid_rules import QueryValidationError, grid_number, sanitize_query
from gamegrid.exceptions import UpstreamError
from gamegrid.models.dc_models import ErrorModel, GameModel, GridResponseModel, HealthModel
from gamegrid.rate_limiter import RateLimiter
from gamegrid.services.catalog import CatalogGateway
from gamegrid.services.daily_grid import DailyGridService

UNKNOWN_CLIENT = "unknown"

grid_router = APIRouter()


def get_daily_grid_service(request: Request) -> DailyGridService:
    return request.app.state.daily_grid_service


def get_catalog(request: Request) -> CatalogGateway:
    return request.app.state.catalog


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_client_id(request: Request) -> str:
    """Rate-limit identity: forwarded address, then peer address, then a shared bucket.

    X-Forwarded-For is client-supplied; it is only trusted when the deployment
    sits behind a proxy that overwrites it (TRUST_FORWARDED_FOR).
    """
    if getattr(request.app.state, "trust_forwarded_for", True):
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first
    if request.client is not None and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def error_response(status_code: int, message: str, details=None) -> JSONResponse:
    content = ErrorModel(error=message, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=content)


class HealthAPI:
    @staticmethod
    @grid_router.get("/health", response_model=HealthModel)
    async def health():
        return HealthModel(status="ok")


class GridAPI:
    @staticmethod
    @grid_router.get(
        "/api/games",
        response_model=GridResponseModel,
        response_model_exclude_none=True,
        responses={500: {"model": ErrorModel}},
    )
    async def get_games(daily_grid_service: DailyGridService = Depends(get_daily_grid_service)):
        try:
            grid = await daily_grid_service.get_todays_grid()
        except UpstreamError as e:
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e), e.details)
        except Exception as e:
            logging.exception(f"Failed to build today's grid: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Unknown error")
        return GridResponseModel(games=grid.games, gridId=grid.date, gridNumber=grid_number(grid.date))


class SearchAPI:
    @staticmethod
    @grid_router.get(
        "/api/search",
        response_model=List[GameModel],
        response_model_exclude_none=True,
        responses={400: {"model": ErrorModel}, 429: {"model": ErrorModel}, 500: {"model": ErrorModel}},
    )
    async def search_games(
        request: Request,
        query: Optional[str] = Query(None),
        catalog: CatalogGateway = Depends(get_catalog),
        rate_limiter: RateLimiter = Depends(get_rate_limiter),
    ):
        # Rejected before rate limiting; CatalogGateway.search re-checks for direct callers.
        try:
            sanitized = sanitize_query(query)
        except QueryValidationError as e:
            return error_response(status.HTTP_400_BAD_REQUEST, str(e))

        client_id = get_client_id(request)
        if rate_limiter.is_limited(client_id):
            logging.info(f"Search rate limit hit for {client_id}")
            return error_response(status.HTTP_429_TOO_MANY_REQUESTS, "Too many requests, please slow down.")

        try:
            return await catalog.search(sanitized)
        except UpstreamError as e:
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e), e.details)
        except Exception as e:
            logging.exception(f"Search failed: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Unknown error")
