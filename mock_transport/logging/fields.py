from __future__ import annotations

CALL_ID = "call_id"
METHOD = "method"
STYLE = "style"
STATE = "state"
DELAY_MS = "delay_ms"
ERROR_KIND = "error_kind"
ERROR_TYPE = "error_type"
STATUS_CODE = "status_code"
