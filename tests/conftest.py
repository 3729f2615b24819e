from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

value = str(ROOT)
if value not in sys.path:
    sys.path.insert(0, value)

os.environ.setdefault("MOCK_TRANSPORT_LOG_JSON", "false")
