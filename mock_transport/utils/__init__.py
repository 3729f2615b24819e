from mock_transport.utils.ids import new_call_id
from mock_transport.utils.validation import require_delay, require_percentage

__all__ = [
    "new_call_id",
    "require_delay",
    "require_percentage",
]
