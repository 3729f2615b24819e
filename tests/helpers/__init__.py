from tests.helpers.factories import (
    BASE_URL,
    SEED,
    MockClientHarness,
    make_harness,
    make_settings,
)
from tests.helpers.fakes import (
    NextErrorHandler,
    RecordingCallback,
    RecordingSubscriber,
    SpyExecutor,
)

__all__ = [
    "BASE_URL",
    "SEED",
    "MockClientHarness",
    "NextErrorHandler",
    "RecordingCallback",
    "RecordingSubscriber",
    "SpyExecutor",
    "make_harness",
    "make_settings",
]
