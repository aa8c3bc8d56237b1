# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus request metrics and optional request logging.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from fairway.api.api_config import get_api_config
from fairway.api.error_handlers import register_error_handlers
from fairway.api.routers.courses import router as courses_router
from fairway.api.routers.events import router as events_router
from fairway.api.routers.health import router as health_router
from fairway.api.routers.profiles import router as profiles_router
from fairway.api.routers.rounds import router as rounds_router
from fairway.api.routers.series import router as series_router
from fairway.common.logging import configure_logging

logger = logging.getLogger("fairway.api.requests")

API_HTTP_REQUESTS_TOTAL = Counter(
    "fairway_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "fairway_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "fairway_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Versioned API for golf courses, series, events, rounds and player profiles. "
            "Every response is an envelope with a status, the data or an error, and a timestamp."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "courses", "description": "Courses and their tees."},
            {"name": "series", "description": "Competition series and their participants."},
            {"name": "events", "description": "Events and registered players."},
            {"name": "rounds", "description": "Rounds played and hole-by-hole scores."},
            {"name": "profiles", "description": "Player profiles and admin flags."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = request.url.path
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                logger.info(
                    "request_id=%s method=%s path=%s status=%s duration_ms=%.2f",
                    request_id,
                    method_label,
                    path_label,
                    status_code,
                    duration_ms,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(courses_router, prefix=config.api_version_path)
    app.include_router(series_router, prefix=config.api_version_path)
    app.include_router(events_router, prefix=config.api_version_path)
    app.include_router(rounds_router, prefix=config.api_version_path)
    app.include_router(profiles_router, prefix=config.api_version_path)

    return app


app = create_app()
