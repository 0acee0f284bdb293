from django.utils.deprecation import MiddlewareMixin

from .store import get_store


class EntityStoreMiddleware(MiddlewareMixin):
    """
    Attaches the configured entity store to the request.

    Handlers read `request.store` and pass it explicitly into the service
    layer; nothing below the handlers looks the store up on its own.
    """

    def process_request(self, request):
        request.store = get_store()
