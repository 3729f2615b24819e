from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mock_transport.contracts.enums import InvocationStyle
from mock_transport.core.errors import (
    NETWORK_ERROR_MESSAGE,
    MockHttpException,
    TransportError,
)
from mock_transport.logging import ERROR_KIND, ERROR_TYPE, STATUS_CODE, get_logger

if TYPE_CHECKING:
    from mock_transport.client import ErrorHandler

logger = get_logger(__name__)


def adapt_error(style: InvocationStyle, replacement: BaseException) -> BaseException:
    if style is not InvocationStyle.CALLBACK:
        return replacement
    if isinstance(replacement, TransportError):
        return replacement
    return TransportError.wrapping(replacement)


class ErrorTranslator:
    def __init__(self, error_handler: ErrorHandler, url: str | None = None) -> None:
        self._error_handler = error_handler
        self._url = url

    def normalize(self, error: BaseException, success_type: Any) -> TransportError:
        if isinstance(error, TransportError):
            return error
        if isinstance(error, MockHttpException):
            return TransportError.http_error(
                self._url, error.to_response(), error.body, success_type, cause=error
            )
        return TransportError.unexpected_error(self._url, error)

    def network_failure(self) -> TransportError:
        return TransportError.network_error(self._url, OSError(NETWORK_ERROR_MESSAGE))

    def handle(self, error: TransportError) -> BaseException:
        replacement = self._error_handler(error)
        if replacement is None:
            return error
        if replacement is not error:
            logger.debug(
                "error_replaced_by_handler",
                extra={"extra_fields": {ERROR_TYPE: type(replacement).__name__}},
            )
        return replacement

    def translate(
        self, style: InvocationStyle, success_type: Any, error: BaseException | None = None
    ) -> BaseException:
        if error is None:
            normalized = self.network_failure()
        else:
            normalized = self.normalize(error, success_type)
        logger.debug(
            "call_failed",
            extra={
                "extra_fields": {
                    ERROR_KIND: normalized.kind.value if normalized.kind else None,
                    STATUS_CODE: normalized.status_code,
                }
            },
        )
        return adapt_error(style, self.handle(normalized))
