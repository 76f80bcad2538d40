from __future__ import annotations

from typing import Iterable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


DEFAULT_TIMEOUT = 30


class TimeoutHTTPAdapter(HTTPAdapter):
    def __init__(self, *args, timeout: float = DEFAULT_TIMEOUT, **kwargs) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    user_agent: str,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 0,
    status_forcelist: Iterable[int] = (500, 502, 503, 504),
) -> requests.Session:
    """Session used for api.weather.gov, which rejects requests without a User-Agent."""
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent, "Accept": "application/geo+json"})
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status_forcelist=status_forcelist,
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
    )
    adapter = TimeoutHTTPAdapter(timeout=timeout, max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
