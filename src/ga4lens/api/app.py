"""HTTP surface for ga4lens.

five read-only GET routes under /api/ga. handlers are plain (sync) functions,
so fastapi runs them in its threadpool while they wait on google.
"""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ga4lens.config import Settings
from ga4lens.errors import InvalidQueryParameter, UpstreamFailure
from ga4lens.gateway import DEFAULT_TIMESERIES_METRIC, VIEWS, ReportGateway
from ga4lens.models.views import OverviewResponse, RowsResponse, TimeSeriesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ga")


def get_gateway(request: Request) -> ReportGateway:
    return request.app.state.gateway


def _run_view(tag: str, build: Callable, *args):
    """Run a view builder, turning failures into {error, details} responses.

    the response body is rendered inside the try so encoding errors get the
    same tagged 500 as everything else.
    """
    try:
        result = build(*args)
        return JSONResponse(content=result.model_dump(mode="json", by_alias=True))
    except InvalidQueryParameter as e:
        logger.warning("%s: %s", tag, e)
        return JSONResponse(status_code=400, content={"error": tag, "details": str(e)})
    except UpstreamFailure as e:
        logger.error("%s: %s", tag, e.message, exc_info=e)
        return JSONResponse(status_code=500, content={"error": tag, "details": e.message})
    except Exception as e:
        logger.exception("%s: unexpected error", tag)
        return JSONResponse(status_code=500, content={"error": tag, "details": str(e)})


@router.get("/overview", response_model=OverviewResponse)
def overview(
    start: str | None = None,
    end: str | None = None,
    gateway: ReportGateway = Depends(get_gateway),
):
    return _run_view(VIEWS["overview"].tag, gateway.overview, start, end)


@router.get("/timeseries", response_model=TimeSeriesResponse)
def timeseries(
    start: str | None = None,
    end: str | None = None,
    metric: str = DEFAULT_TIMESERIES_METRIC,
    gateway: ReportGateway = Depends(get_gateway),
):
    return _run_view(VIEWS["timeseries"].tag, gateway.timeseries, start, end, metric)


# limit stays a raw string here - the gateway decides how to parse it
@router.get("/top-pages", response_model=RowsResponse)
def top_pages(
    start: str | None = None,
    end: str | None = None,
    limit: str | None = None,
    gateway: ReportGateway = Depends(get_gateway),
):
    return _run_view(VIEWS["top-pages"].tag, gateway.top_pages, start, end, limit)


@router.get("/sources", response_model=RowsResponse)
def sources(
    start: str | None = None,
    end: str | None = None,
    limit: str | None = None,
    gateway: ReportGateway = Depends(get_gateway),
):
    return _run_view(VIEWS["sources"].tag, gateway.sources, start, end, limit)


@router.get("/devices", response_model=RowsResponse)
def devices(
    start: str | None = None,
    end: str | None = None,
    gateway: ReportGateway = Depends(get_gateway),
):
    return _run_view(VIEWS["devices"].tag, gateway.devices, start, end)


def create_app(gateway: ReportGateway, settings: Settings | None = None) -> FastAPI:
    """Build the fastapi app around an already-constructed gateway.

    the gateway (and its google client) is created once by the caller and
    shared by every request via app.state.
    """
    settings = settings or Settings()

    app = FastAPI(title="ga4lens", description="GA4 reporting gateway for dashboards")
    app.state.gateway = gateway
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app
