from mock_transport.logging.fields import (
    CALL_ID,
    DELAY_MS,
    ERROR_KIND,
    ERROR_TYPE,
    METHOD,
    STATE,
    STATUS_CODE,
    STYLE,
)
from mock_transport.logging.logger import (
    JsonFormatter,
    clear_correlation_context,
    configure_logging,
    get_correlation_context,
    get_logger,
    set_correlation_context,
    update_correlation_context,
)

__all__ = [
    "CALL_ID",
    "DELAY_MS",
    "ERROR_KIND",
    "ERROR_TYPE",
    "JsonFormatter",
    "METHOD",
    "STATE",
    "STATUS_CODE",
    "STYLE",
    "clear_correlation_context",
    "configure_logging",
    "get_correlation_context",
    "get_logger",
    "set_correlation_context",
    "update_correlation_context",
]
