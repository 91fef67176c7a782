"""Error handling helpers for the product admin screen."""
from typing import Any, Dict
import logging

from pharmacy_admin.admin.validation import FormValidationError
from pharmacy_admin.integrations.policy.response_wrappers import IntegrationResponseError, ProductApiError

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the server. Please check your connection and try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        """Map an exception to the message shown to the admin user."""
        context = context or {}
        metadata: Dict[str, Any] = {"error": str(exc), "context": context}

        if isinstance(exc, FormValidationError):
            logger.info("Form validation failed: %s", exc.message)
            message = exc.message
            metadata["field_errors"] = dict(exc.field_errors)
            kind = "validation"
        elif isinstance(exc, ProductApiError):
            logger.error("Products API call failed (%s): %s", exc.kind, exc.message)
            message = NETWORK_ERROR_MESSAGE if exc.kind == "transport" else exc.message
            metadata["status_code"] = exc.status_code
            kind = exc.kind
        elif isinstance(exc, IntegrationResponseError):
            logger.error("Unreadable products API response: %s", exc)
            message = str(exc)
            kind = "response"
        else:
            logger.error("Unhandled exception in product admin: %s", exc, exc_info=True)
            message = UNEXPECTED_ERROR_MESSAGE
            kind = "internal"

        metadata["kind"] = kind
        return {
            "message": message,
            "fallback": kind == "internal",
            "metadata": metadata,
        }
