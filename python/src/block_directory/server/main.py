"""
Block Directory Server

A FastAPI service exposing block directory search over HTTP.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..catalog.client import CatalogClient
from ..catalog.installed import FilesystemInstallationIndex
from ..config import DirectorySettings, directory_logger
from ..directory.permissions import CallerContext
from ..directory.service import BlockDirectoryService
from ..errors import BlockDirectoryError
from .api_routes import block_directory_router

CallerResolver = Callable[[Request], CallerContext]


def anonymous_caller(request: Request) -> CallerContext:
    """Fallback resolver used when the host does not provide one."""
    return CallerContext()


def build_service(settings: DirectorySettings) -> BlockDirectoryService:
    """Wire the default catalog client and filesystem index from settings."""
    return BlockDirectoryService(
        catalog_client=CatalogClient(settings.catalog_url, timeout=settings.catalog_timeout),
        installation_index=FilesystemInstallationIndex(settings.modules_dir, settings.module_file_suffix),
        settings=settings
    )


def create_app(settings: DirectorySettings | None = None,
               service: BlockDirectoryService | None = None,
               caller_resolver: CallerResolver | None = None) -> FastAPI:
    """Create the block directory application."""
    settings = settings or (service.settings if service else DirectorySettings.from_env())
    directory_service = service or build_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        directory_logger.info(f"Block directory started with catalog: {settings.catalog_url}")

        yield

        try:
            await directory_service.catalog_client.close()
            directory_logger.info("Block directory shutdown complete")
        except Exception as e:
            directory_logger.error(f"Error during shutdown: {e}")

    app = FastAPI(
        title="Block Directory Service",
        description="Search a remote block catalog for installable blocks",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.directory_service = directory_service
    app.state.caller_resolver = caller_resolver or anonymous_caller

    @app.exception_handler(BlockDirectoryError)
    async def handle_directory_error(request: Request, exc: BlockDirectoryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        params = {}
        for error in exc.errors():
            loc = error.get("loc", ())
            params[str(loc[-1]) if loc else "request"] = error.get("msg", "Invalid value")
        message = "Invalid parameter(s): " + ", ".join(sorted(params))
        return JSONResponse(
            status_code=400,
            content={"code": "rest_invalid_param", "message": message, "data": {"status": 400, "params": params}}
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "block-directory"}

    app.include_router(block_directory_router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = DirectorySettings.from_env()
    directory_logger.info(f"Starting block directory on {settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
