from __future__ import annotations

from typing import Any

import httpx

from mock_transport.contracts.enums import ErrorKind

NETWORK_ERROR_MESSAGE = "Mock network error!"


class TransportError(Exception):
    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind | None,
        url: str | None = None,
        response: httpx.Response | None = None,
        body: Any = None,
        success_type: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.url = url
        self.response = response
        self.body = body
        self.success_type = success_type
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None

    @property
    def reason(self) -> str | None:
        return self.response.reason_phrase if self.response is not None else None

    @classmethod
    def network_error(cls, url: str | None, cause: BaseException) -> TransportError:
        return cls(str(cause), kind=ErrorKind.NETWORK, url=url, cause=cause)

    @classmethod
    def http_error(
        cls,
        url: str | None,
        response: httpx.Response,
        body: Any,
        success_type: Any,
        cause: BaseException | None = None,
    ) -> TransportError:
        message = f"{response.status_code} {response.reason_phrase}"
        return cls(
            message,
            kind=ErrorKind.HTTP,
            url=url,
            response=response,
            body=body,
            success_type=success_type,
            cause=cause,
        )

    @classmethod
    def unexpected_error(cls, url: str | None, cause: BaseException) -> TransportError:
        return cls(str(cause), kind=ErrorKind.UNEXPECTED, url=url, cause=cause)

    @classmethod
    def wrapping(cls, replacement: BaseException) -> TransportError:
        return cls(str(replacement), kind=None, cause=replacement)

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind else None
        return f"TransportError(kind={kind!r}, message={self.message!r})"


class MockHttpException(Exception):
    def __init__(self, status_code: int, reason: str, body: Any = None) -> None:
        if status_code < 300 or status_code > 599:
            raise ValueError(f"Unsupported HTTP error code: {status_code}")
        super().__init__(f"HTTP {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.headers: list[tuple[str, str]] = []

    def with_header(self, name: str, value: str) -> MockHttpException:
        if not name:
            raise ValueError("Header name must not be empty.")
        self.headers.append((name, value))
        return self

    def to_response(self) -> httpx.Response:
        return httpx.Response(
            self.status_code,
            headers=self.headers,
            extensions={"reason_phrase": self.reason.encode("ascii", errors="ignore")},
        )

    @classmethod
    def new_bad_request(cls, body: Any) -> MockHttpException:
        return cls(400, "Bad Request", body)

    @classmethod
    def new_unauthorized(cls, body: Any) -> MockHttpException:
        return cls(401, "Unauthorized", body)

    @classmethod
    def new_forbidden(cls, body: Any) -> MockHttpException:
        return cls(403, "Forbidden", body)

    @classmethod
    def new_not_found(cls, body: Any) -> MockHttpException:
        return cls(404, "Not Found", body)

    @classmethod
    def new_internal_error(cls, body: Any) -> MockHttpException:
        return cls(500, "Internal Server Error", body)
