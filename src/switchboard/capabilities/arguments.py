"""Arguments — typed, read-only access to a tool or prompt argument object.

Handlers never touch the raw JSON object directly; they pull each field out
with an explicit type and default, and a type mismatch becomes an
:class:`~switchboard.protocol.errors.InvalidParamsError` (``-32602``).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from switchboard.protocol.errors import InvalidParamsError


class Arguments:
    """Immutable wrapper around the ``arguments`` object of a request.

    Usage::

        args = Arguments.from_params(params.get("arguments"))
        text = args.get_str("text", "No text provided")
        detailed = args.get_bool("detailed", False)
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))

    @classmethod
    def from_params(cls, raw: Any) -> Arguments:
        """Build from a request's ``arguments`` member, which may be absent."""
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            msg = "'arguments' must be an object"
            raise InvalidParamsError(msg)
        return cls(raw)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def get_str(self, name: str, default: str) -> str:
        """Return the string argument *name*, or *default* when absent or null."""
        value = self._values.get(name)
        if value is None:
            return default
        if not isinstance(value, str):
            msg = f"Argument '{name}' must be a string"
            raise InvalidParamsError(msg, data=name)
        return value

    def get_bool(self, name: str, default: bool) -> bool:
        value = self._values.get(name)
        if value is None:
            return default
        if not isinstance(value, bool):
            msg = f"Argument '{name}' must be a boolean"
            raise InvalidParamsError(msg, data=name)
        return value
