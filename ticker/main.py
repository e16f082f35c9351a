"""
Dev Ticker Server

A FastAPI-based stand-in for the CoinMarketCap and CoinGecko price APIs,
used while developing services that depend on token prices locally.

Prices are randomly distributed around base values estimated from real
world prices. Tokens listed by the CoinGecko-style endpoint come from a
static catalog file (see ``Settings.tokens_path``).

Sloppy Mode:
------------
Started with ``--sloppy``, the server simulates an unreliable upstream:

1. 5% of requests fail with a bare HTTP 500
2. 60% of the rest are delayed by 100ms
3. 10% of the rest are delayed by 5 seconds
4. 30% of the rest are delayed by a random 100ms-1s
"""
import argparse
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from ticker.api import build_router
from ticker.config import Settings, settings as default_settings
from ticker.schemas import HealthResponse, TokenDescriptor
from ticker.services.catalog import CatalogError, load_catalog
from ticker.services.faults import FaultInjector
from ticker.services.pricing import PriceSynthesizer
from ticker.logging import (
    configure_logging,
    get_logger,
    set_request_context,
    clear_request_context,
    generate_request_id,
)
from ticker import metrics

# Configure structured logging
configure_logging(default_settings.log_level)
logger = get_logger(__name__)

UNTRACED_PATHS = ("/health", "/metrics")
UNMATCHED_ENDPOINT = "<unmatched>"


def _endpoint_label(request: Request) -> str:
    """Route template for metric labels, so path parameters do not add series."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ENDPOINT)


def create_app(
    settings: Optional[Settings] = None,
    catalog: Optional[Sequence[TokenDescriptor]] = None,
    synthesizer: Optional[PriceSynthesizer] = None,
    injector: Optional[FaultInjector] = None,
) -> FastAPI:
    """
    Build the ticker application.

    The catalog is loaded here, before anything is served, so a bad
    catalog file stops the process at startup.

    Args:
        settings: Application settings. Defaults to the environment-loaded settings.
        catalog: Token catalog. Loaded from settings.tokens_path when omitted.
        synthesizer: Price source. A fresh PriceSynthesizer when omitted.
        injector: Fault injector. Created when omitted and settings.sloppy is set.

    Returns:
        Configured FastAPI application

    Raises:
        CatalogError: If the catalog has to be loaded and cannot be
    """
    settings = settings or default_settings

    if catalog is None:
        catalog = load_catalog(settings.tokens_path)
    catalog = tuple(catalog)

    synthesizer = synthesizer or PriceSynthesizer()
    if injector is None and settings.sloppy:
        injector = FaultInjector()
    sloppy = injector is not None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            "service_starting",
            service_name=settings.service_name,
            sloppy=sloppy,
            token_count=len(catalog),
        )
        if sloppy:
            logger.info("sloppy_mode_enabled", service_name=settings.service_name)

        yield

        logger.info("service_stopping", service_name=settings.service_name)

    app = FastAPI(
        title="Dev Ticker Server",
        description="Mock CoinMarketCap/CoinGecko price APIs for local development",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.sloppy = sloppy

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """
        Middleware for request tracing, logging, and metrics.

        Sets up request context with:
        - request_id: Unique identifier for tracing
        - Timing for duration_ms calculation
        - Prometheus metrics collection
        """
        method = request.method
        path = request.url.path

        # Skip logging/metrics for health and metrics endpoints
        if path in UNTRACED_PATHS:
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_context(request_id)
        request.state.request_id = request_id

        start_time = time.perf_counter()

        logger.info("request_received", method=method, path=path)

        try:
            response = await call_next(request)

            duration_seconds = time.perf_counter() - start_time

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration_ms=round(duration_seconds * 1000, 2),
            )

            metrics.record_http_request(
                method, _endpoint_label(request), response.status_code, duration_seconds
            )

            # Add request_id to response headers for tracing
            response.headers["X-Request-ID"] = request_id

            return response

        except Exception as e:
            duration_seconds = time.perf_counter() - start_time

            logger.error(
                "request_failed",
                method=method,
                path=path,
                duration_ms=round(duration_seconds * 1000, 2),
                error=str(e),
            )

            metrics.record_http_request(method, _endpoint_label(request), 500, duration_seconds)

            raise

        finally:
            clear_request_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=settings.cors_max_age_seconds,
    )

    app.include_router(build_router(catalog, synthesizer, injector))

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint for container orchestration."""
        return HealthResponse(
            status="ok",
            service=settings.service_name,
            sloppy=sloppy,
            tokens=len(catalog),
        )

    @app.get("/metrics")
    async def prometheus_metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    return app


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dev-ticker",
        description="Mock CoinMarketCap/CoinGecko ticker for the dev environment.",
    )
    parser.add_argument(
        "--sloppy",
        action="store_true",
        help=(
            "randomly delay requests (60%% by 0.1s, 30%% by 0.1-1.0s, 10%% by 5s) "
            "and fail 5%% of them with HTTP 500"
        ),
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the dev-ticker console script."""
    args = parse_args(argv)

    settings = default_settings
    if args.sloppy:
        settings = settings.model_copy(update={"sloppy": True})

    try:
        app = create_app(settings)
    except CatalogError as e:
        logger.error(
            "startup_aborted",
            path=e.path,
            error=e.detail,
        )
        sys.exit(1)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
        access_log=False,
    )


if __name__ == "__main__":
    main()
