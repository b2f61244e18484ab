from pydantic import BaseModel, Field, field_validator

from ._utils.constants import CONTROL_BASE_URL, DEFAULT_TIMEOUT, LOGIN_BASE_URL


class Config(BaseModel):
    control_base_url: str = CONTROL_BASE_URL
    login_base_url: str = LOGIN_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    debug: bool = False

    @field_validator("control_base_url", "login_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("Base URLs must start with http:// or https://")
        return value.rstrip("/")
