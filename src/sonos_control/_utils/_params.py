from typing import Any, Mapping, Optional


def merge_present(
    required: Optional[Mapping[str, Any]] = None,
    optional: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Merge required values with the optional ones the caller actually supplied.

    The vendor treats the presence of a key as an explicit override, so an
    optional value of ``None`` is left out entirely. Falsy values such as
    ``False`` or ``0`` are kept.
    """
    merged: dict[str, Any] = dict(required or {})
    for key, value in (optional or {}).items():
        if value is not None:
            merged[key] = value
    return merged
