"""
ASGI entry points for Listkeeper.

`application` serves any ASGI server (Uvicorn, Daphne). `lambda_handler`
wraps it with Mangum for AWS Lambda behind API Gateway.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

# Built at import so Lambda pays the setup cost once per container
application = get_asgi_application()

_mangum = None


def lambda_handler(event, context):
    global _mangum
    if _mangum is None:
        from mangum import Mangum
        _mangum = Mangum(application, lifespan="off")
    return _mangum(event, context)
