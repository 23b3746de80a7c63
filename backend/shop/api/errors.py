"""Service error handling at the HTTP boundary."""

from __future__ import annotations

from flask import Flask

from shop.core.errors import APIError, api_error_response
from shop.services._shared.base import BaseService
from shop.services._shared.errors import ServiceError


def register_service_error_handler(app: Flask) -> None:
    """Render every :class:`ServiceError` as its problem+json counterpart.

    Storage failures become a generic 500; the logged traceback keeps the
    chained driver exception.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        assert isinstance(translated, APIError)
        return api_error_response(translated)
