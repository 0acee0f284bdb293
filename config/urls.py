"""
URL configuration for Listkeeper project.
"""
import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.urls import path
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError

from apps.core.errors import DomainError
from apps.core.parser import JsonOrFormParser

logger = logging.getLogger(__name__)

api = NinjaAPI(
    title="Listkeeper API",
    version="1.0.0",
    description="Shared lists and tasks",
    docs_url="/docs",
    parser=JsonOrFormParser(),
)

from apps.identity.api import router as identity_router
from apps.lists.api import router as lists_router

api.add_router("/", identity_router)
api.add_router("/", lists_router)


@api.exception_handler(DomainError)
def domain_error_handler(request: HttpRequest, exc: DomainError):
    return api.create_response(request, {"message": exc.message}, status=exc.status_code)


@api.exception_handler(ValidationError)
def validation_error_handler(request: HttpRequest, exc: ValidationError):
    """Wrongly typed input is a 400 like any other invalid argument."""
    fields = [str(error["loc"][-1]) for error in exc.errors if error.get("loc")]
    if fields:
        message = f"Invalid value for field '{fields[0]}'"
    else:
        message = "Invalid request"
    return api.create_response(request, {"message": message}, status=400)


@api.exception_handler(HttpError)
def http_error_handler(request: HttpRequest, exc: HttpError):
    return api.create_response(request, {"message": str(exc)}, status=exc.status_code)


@api.exception_handler(Exception)
def unexpected_error_handler(request: HttpRequest, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.path}: {exc}")
    return api.create_response(request, {"message": "Internal Server Error"}, status=500)


@api.get("/", include_in_schema=False)
def root_probe(request: HttpRequest):
    return HttpResponse(settings.ROOT_BANNER, content_type="text/html")


urlpatterns = [
    path('', api.urls),
]
