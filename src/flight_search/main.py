"""
Main application entry point
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import httpx
import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import search_router
from .clients import AmadeusClient, TokenCache
from .config import Config, get_config
from .error_handlers import register_exception_handlers
from .services import AirportCatalog, SearchService
from .utils.logger import setup_logging


logger = structlog.get_logger(__name__)


def build_search_service(config: Config, http_client: httpx.AsyncClient) -> SearchService:
    """Wire the token cache, Amadeus client and catalog around one HTTP client"""
    amadeus = config.amadeus
    token_cache = TokenCache(
        http_client=http_client,
        token_url=amadeus.token_url,
        client_id=amadeus.client_id,
        client_secret=amadeus.client_secret,
        safety_margin=amadeus.token_safety_margin,
    )
    client = AmadeusClient(
        http_client=http_client,
        token_cache=token_cache,
        location_limit=amadeus.location_limit,
        flight_result_limit=amadeus.flight_result_limit,
    )
    return SearchService(
        client=client,
        catalog=AirportCatalog() if amadeus.use_fallback_catalog else None,
        min_keyword_length=config.autocomplete.min_keyword_length,
    )


def create_app(config: Optional[Config] = None, search_service: Optional[SearchService] = None) -> FastAPI:
    """Create the FastAPI application"""
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management"""
        # Startup
        setup_logging(config.logging)
        logger.info("Starting Flight Search API", version=__version__, environment=config.server.environment)

        http_client = None
        if search_service is not None:
            app.state.search_service = search_service
        else:
            config.amadeus.require_credentials()
            http_client = httpx.AsyncClient(
                base_url=config.amadeus.base_url,
                timeout=config.amadeus.timeout,
                headers={"Accept": "application/json", "User-Agent": f"FlightSearch/{__version__}"},
            )
            app.state.search_service = build_search_service(config, http_client)

        yield

        # Shutdown
        logger.info("Shutting down Flight Search API")
        if http_client is not None:
            await http_client.aclose()

    app = FastAPI(
        title="Flight Search API",
        description="Flight and airport search backed by the Amadeus self-service API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if config.server.debug else None,
        redoc_url="/redoc" if config.server.debug else None,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(search_router)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint"""
        health_status = {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": __version__,
            "environment": config.server.environment,
            "components": {},
        }

        service = getattr(request.app.state, "search_service", None)
        if service is None:
            health_status["status"] = "degraded"
            health_status["components"]["search_service"] = {"status": "not_initialized"}
        else:
            health_status["components"]["search_service"] = {"status": "healthy"}
            token_cache = getattr(service.client, "token_cache", None)
            if isinstance(token_cache, TokenCache):
                health_status["components"]["token_cache"] = token_cache.describe()

        return health_status

    return app


def main():
    """Run the API server"""
    config = get_config()
    uvicorn.run(
        "flight_search.main:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=config.is_development and config.server.debug,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
