"""Serverless entry point: the same routes, served from AWS Lambda behind API Gateway."""
from mangum import Mangum

from file_manager.config.settings import get_settings
from file_manager.main import create_app

# Built once per Lambda container and reused across invocations
handler = Mangum(create_app(get_settings()), lifespan="off")
