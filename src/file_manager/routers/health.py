from fastapi import APIRouter, Depends

from file_manager.config.settings import Settings
from file_manager.dependencies import get_app_settings

router = APIRouter()


@router.get("/health")
def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Health check endpoint for monitoring API status and configuration readiness.

    The object store is not contacted; a missing bucket name only shows up
    here as a degraded status and as errors on the object routes.
    """
    health_status = {
        "status": "ok",
        "components": {
            "api": "ready",
            "storage": "ready",
        },
        "ready": False,
    }

    if not settings.s3_bucket_name:
        health_status["components"]["storage"] = "error: S3 bucket name is not set"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return health_status
