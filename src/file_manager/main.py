from textwrap import dedent
import logging

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from file_manager import __version__
from file_manager.config.settings import Settings, configure_logging, get_settings
from file_manager.errors import (
    FileManagerError,
    handle_broad_exceptions,
    handle_file_manager_errors,
    handle_pydantic_validation_errors,
)
from file_manager.routers.health import router as health_router
from file_manager.routers.objects import router as objects_router
from file_manager.routers.upload import router as upload_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="File Manager API",
        summary="Upload files straight to S3 with presigned URLs and list what is stored",
        version=__version__,
        description=dedent(
            """\
        | Route | Notes |
        | --- | --- |
        | `GET /api/upload?key=...` | Presigned PUT URL for one object key |
        | `GET /api/objects` | Objects stored at the top level of the bucket |

        Every response body is an envelope `{status, message, data}` whose
        `status` matches the HTTP status code.
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )

    # The browser UI calls the API from its own origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    logger.info(f"Serving bucket '{settings.s3_bucket_name}' in region {settings.aws_region}")

    app.include_router(objects_router, prefix="/api", tags=["objects"])
    app.include_router(upload_router, prefix="/api", tags=["upload"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=FileManagerError,
        handler=handle_file_manager_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
