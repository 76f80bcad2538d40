from pathlib import Path

import pytest
import requests

FIXTURES = Path(__file__).parent / "fixtures"

ENV_KEYS = (
    "RAIN_LOCATION",
    "RAIN_LAT",
    "RAIN_LON",
    "RAIN_THRESHOLD",
    "NWS_POINTS_URL",
    "USER_AGENT",
    "HTTP_TIMEOUT",
    "LOG_LEVEL",
    "LOGS_DIR",
    "DRY_RUN",
    "MAIL_FROM",
    "MAIL_TO",
    "SES_REGION",
    "MAIL_SUBJECT_FMT",
    "MAIL_BODY_FMT",
    "MAIL_CHARSET",
    "NOTIFY_TZ",
)


def make_response(body: bytes, status: int = 200, url: str = "") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.url = url
    return resp


class FakeSession(requests.Session):
    """Serves canned bodies by URL; anything else fails like a dead network.

    A route may map to ``(status, body)`` to answer with a non-200 status.
    """

    def __init__(self, routes: dict) -> None:
        super().__init__()
        self.routes = routes
        self.requested: list[str] = []

    def get(self, url, **kwargs):
        self.requested.append(url)
        if url in self.routes:
            route = self.routes[url]
            if isinstance(route, tuple):
                status, body = route
                return make_response(body, status=status, url=url)
            return make_response(route, url=url)
        if not url:
            # Let requests reject the empty URL itself.
            return super().get(url, **kwargs)
        raise requests.ConnectionError(f"no route to {url}")


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("rainreminder.config.load_dotenv", lambda: None)
    return monkeypatch


@pytest.fixture
def fixture_bytes():
    def _read(name: str) -> bytes:
        return (FIXTURES / name).read_bytes()

    return _read
