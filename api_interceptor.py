"""
Capture backend API exchanges triggered by browser actions.

Usage:

    with intercept_api(page, "/api/accounts", "POST") as signup_call:
        signup_page.submit()
    assert signup_call.response.status == 201
"""
import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from playwright.sync_api import Error as PlaywrightError

UrlPattern = Union[str, "re.Pattern[str]"]

DEFAULT_TIMEOUT_MS = 30_000


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: Any


def response_matches(response, url_pattern: UrlPattern, method: str = "POST") -> bool:
    url = response.url
    if isinstance(url_pattern, str):
        url_ok = url_pattern in url
    else:
        url_ok = re.search(url_pattern, url) is not None
    return url_ok and response.request.method == method.upper()


def to_api_response(response) -> ApiResponse:
    try:
        body = response.json()
    except (PlaywrightError, ValueError):
        body = {}
    return ApiResponse(status=response.status, body=body)


class InterceptedApi:
    def __init__(self, url_pattern: UrlPattern, method: str):
        self.url_pattern = url_pattern
        self.method = method
        self._response: Optional[ApiResponse] = None

    @property
    def response(self) -> ApiResponse:
        if self._response is None:
            raise RuntimeError(
                f"{self.method} {self.url_pattern} not captured yet; read .response after the with block"
            )
        return self._response


@contextmanager
def intercept_api(
    page,
    url_pattern: UrlPattern,
    method: str = "POST",
    timeout: float = DEFAULT_TIMEOUT_MS,
) -> Iterator[InterceptedApi]:
    """
    Wait for the first response matching `url_pattern` and `method` that the
    wrapped block triggers. Playwright's timeout error propagates as is.
    """
    captured = InterceptedApi(url_pattern, method)
    with page.expect_response(
        lambda response: response_matches(response, url_pattern, method),
        timeout=timeout,
    ) as response_info:
        yield captured
    captured._response = to_api_response(response_info.value)
