"""
Catalog Microservice

Album catalog API: in-memory album collection, CRUD endpoints, cover
uploads and static cover serving.

Port: 5000
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Path, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import CatalogServiceConfig
from core.logger import setup_service_logger

from .catalog_service import CatalogService
from .factory import create_catalog_service
from .models import (
    AlbumCreateRequest,
    AlbumDeleteResponse,
    AlbumListParams,
    AlbumResponse,
    AlbumUpdateRequest,
    CatalogHealthResponse,
    CoverUploadResponse,
    ErrorResponse,
)
from .protocols import (
    AlbumNotFoundError,
    AlbumValidationError,
    CatalogServiceError,
    CoverUploadError,
)

# Initialize configuration
service_config = CatalogServiceConfig.from_env()

# Setup logger (parent of every catalog_service module logger)
logger = setup_service_logger(__package__, level=service_config.log_level)


# ==================== Dependency Injection ====================


def get_catalog_service(request: Request) -> CatalogService:
    """Get the catalog service bound to this app"""
    service = getattr(request.app.state, "catalog_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service


def get_origin(request: Request) -> str:
    """Request origin (scheme://host[:port]) used for cover URLs"""
    return str(request.base_url).rstrip("/")


def get_album_id(album_id: str = Path(..., description="Album id")) -> int:
    """Album id from the path; anything that is not a whole number matches no album"""
    if not album_id.isdecimal():
        raise HTTPException(status_code=404, detail=f"Album not found: {album_id}")
    return int(album_id)


# ==================== Album Management ====================


async def list_albums(
    params: AlbumListParams = Depends(),
    origin: str = Depends(get_origin),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    List albums in collection order

    Args:
        params: Optional band and genre substring filters

    Returns:
        Albums with coverUrl
    """
    try:
        return await service.list_albums(origin, band=params.band, genre=params.genre)
    except CatalogServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


async def get_album(
    album_id: int = Depends(get_album_id),
    origin: str = Depends(get_origin),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Get album by id

    Returns:
        Album with coverUrl
    """
    try:
        return await service.get_album(album_id, origin)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


async def create_album(
    request: AlbumCreateRequest,
    origin: str = Depends(get_origin),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Create a new album

    Args:
        request: band, title, year, genre and optional cover filename

    Returns:
        Created album with coverUrl
    """
    try:
        return await service.create_album(request, origin)
    except AlbumValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


async def update_album(
    request: AlbumUpdateRequest,
    album_id: int = Depends(get_album_id),
    origin: str = Depends(get_origin),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Update album fields present in the request body

    Returns:
        Updated album with coverUrl
    """
    try:
        return await service.update_album(album_id, request, origin)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


async def delete_album(
    album_id: int = Depends(get_album_id),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Delete album

    Returns:
        Confirmation message
    """
    try:
        return await service.delete_album(album_id)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


# ==================== Cover Upload ====================


async def upload_cover(
    cover: Optional[UploadFile] = File(None, description="Cover image"),
    origin: str = Depends(get_origin),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Upload a cover image (multipart field "cover")

    Returns:
        Stored filename and its URL
    """
    try:
        return await service.upload_cover(cover, origin)
    except CoverUploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        if cover is not None:
            await cover.close()


# ==================== Health Check ====================


async def health_check(service: CatalogService = Depends(get_catalog_service)):
    """Health check endpoint"""
    return CatalogHealthResponse(
        album_count=await service.count_albums(),
        timestamp=datetime.now(),
    )


# ==================== Error Handlers ====================


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ==================== Application ====================


def create_app(
    config: Optional[CatalogServiceConfig] = None,
    service: Optional[CatalogService] = None,
) -> FastAPI:
    """
    Build the catalog FastAPI application

    Args:
        config: Service configuration, loaded from the environment if omitted
        service: Pre-built service (tests inject one with a custom repository)

    Returns:
        FastAPI: Application with album routes, upload route and /covers mount
    """
    config = config or CatalogServiceConfig.from_env()
    service = service or create_catalog_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management"""
        if service.cover_storage is not None:
            covers_dir = service.cover_storage.ensure_dir()
            logger.info(f"Serving covers from {covers_dir}")
        logger.info(
            f"Catalog Service started on port {config.service_port} "
            f"with {await service.count_albums()} albums"
        )
        yield
        logger.info("Catalog Service stopped")

    app = FastAPI(
        title="Catalog Service",
        description="Album catalog with cover uploads",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.catalog_service = service
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    error_responses = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}

    app.add_api_route("/health", health_check, methods=["GET"], response_model=CatalogHealthResponse)
    app.add_api_route("/albums", list_albums, methods=["GET"], response_model=List[AlbumResponse])
    app.add_api_route(
        "/albums", create_album, methods=["POST"], response_model=AlbumResponse,
        status_code=201, responses=error_responses,
    )
    app.add_api_route(
        "/albums/{album_id}", get_album, methods=["GET"], response_model=AlbumResponse,
        responses=error_responses,
    )
    app.add_api_route(
        "/albums/{album_id}", update_album, methods=["PUT"], response_model=AlbumResponse,
        responses=error_responses,
    )
    app.add_api_route(
        "/albums/{album_id}", delete_album, methods=["DELETE"], response_model=AlbumDeleteResponse,
        responses=error_responses,
    )
    app.add_api_route(
        "/upload-cover", upload_cover, methods=["POST"], response_model=CoverUploadResponse,
        responses=error_responses,
    )

    covers_dir = service.cover_storage.covers_dir if service.cover_storage else config.covers_dir
    app.mount("/covers", StaticFiles(directory=str(covers_dir), check_dir=False), name="covers")

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app


app = create_app(service_config)


# ==================== Run Server ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.catalog_service.main:app",
        host=service_config.service_host,
        port=service_config.service_port,
        reload=service_config.debug,
        log_level=service_config.log_level.lower(),
    )
