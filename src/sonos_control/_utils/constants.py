from importlib.metadata import PackageNotFoundError, version

# Environment
ENV_ACCESS_TOKEN = "SONOS_ACCESS_TOKEN"
ENV_ENCODED_KEYS = "SONOS_ENCODED_KEYS"
ENV_CONTROL_URL = "SONOS_CONTROL_URL"
ENV_LOGIN_URL = "SONOS_LOGIN_URL"

# Base urls
CONTROL_BASE_URL = "https://api.ws.sonos.com/control/api/v1"
LOGIN_BASE_URL = "https://api.sonos.com/login/v3"

# Headers
HEADER_USER_AGENT = "User-Agent"

DEFAULT_TIMEOUT = 30.0

LOGGER_NAME = "sonos_control"

try:
    PACKAGE_VERSION = version("sonos-control")
except PackageNotFoundError:
    PACKAGE_VERSION = "0.0.0"


def user_agent_value(specific_component: str) -> str:
    product = "SonosControl.Python.Sdk"
    product_component = f"SonosControl.Python.Sdk.Requests.{specific_component}"

    return f"{product}/{product_component}/{PACKAGE_VERSION}"
