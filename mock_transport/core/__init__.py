from mock_transport.core.config import MAX_DELAY_MS, Settings, get_settings
from mock_transport.core.errors import NETWORK_ERROR_MESSAGE, MockHttpException, TransportError

__all__ = [
    "MAX_DELAY_MS",
    "NETWORK_ERROR_MESSAGE",
    "MockHttpException",
    "Settings",
    "TransportError",
    "get_settings",
]
