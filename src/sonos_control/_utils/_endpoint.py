import re
from string import Formatter
from typing import Any
from urllib.parse import quote

from ..models.errors import RequestBuildError

# Sonos ids such as "RINCON_7DQQGH13GH4Q12345:218" must keep their colon.
_PATH_SAFE_CHARS = ":"

_PLACEHOLDER = re.compile(r"\{[^{}]*\}")


class Endpoint(str):
    """A URL path, possibly holding ``{name}`` placeholders.

    Examples:
        >>> Endpoint("households/{householdId}/groups")
        '/households/{householdId}/groups'
        >>> Endpoint("/households/{householdId}/groups").format(householdId="H1")
        '/households/H1/groups'
    """

    def __new__(cls, endpoint: str) -> "Endpoint":
        if "://" not in endpoint and not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return super().__new__(cls, endpoint)

    @property
    def placeholders(self) -> list[str]:
        return [
            field_name
            for _, field_name, _, _ in Formatter().parse(self)
            if field_name is not None
        ]

    @property
    def is_resolved(self) -> bool:
        return _PLACEHOLDER.search(self) is None

    def format(self, *args: Any, **kwargs: Any) -> "Endpoint":
        """Substitute every placeholder with its percent-quoted value.

        Raises:
            RequestBuildError: If a placeholder has no value, the value is empty,
                or a value is given for a name the template does not contain.
        """
        if args:
            raise RequestBuildError("Path parameters must be passed by name.")

        placeholders = self.placeholders
        unknown = sorted(set(kwargs) - set(placeholders))
        if unknown:
            raise RequestBuildError(
                f"Unknown path parameter(s) {', '.join(unknown)} for '{self}'."
            )

        values: dict[str, str] = {}
        for name in placeholders:
            value = kwargs.get(name)
            if value is None or str(value) == "":
                raise RequestBuildError(
                    f"Missing value for path parameter '{name}' in '{self}'."
                )
            values[name] = quote(str(value), safe=_PATH_SAFE_CHARS)

        return Endpoint(super().format(**values))

    def with_base(self, base_url: str) -> "Endpoint":
        if "://" in self:
            return self
        return Endpoint(f"{base_url.rstrip('/')}{self}")
