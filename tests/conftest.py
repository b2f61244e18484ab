import sys
from pathlib import Path

import pytest

# Ensure local source package (src/sonos_control) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from sonos_control import Config  # noqa: E402

CONTROL_URL = "https://api.ws.sonos.com/control/api/v1"
LOGIN_URL = "https://api.sonos.com/login/v3"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "SONOS_ACCESS_TOKEN",
        "SONOS_ENCODED_KEYS",
        "SONOS_CONTROL_URL",
        "SONOS_LOGIN_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def control_url() -> str:
    return CONTROL_URL


@pytest.fixture
def login_url() -> str:
    return LOGIN_URL


@pytest.fixture
def access_token() -> str:
    return "accessToken"


@pytest.fixture
def encoded_keys() -> str:
    return "Y2xpZW50OnNlY3JldA=="


@pytest.fixture
def config() -> Config:
    return Config()
