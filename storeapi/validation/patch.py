"""
Partial updates as explicit patches.

A patch maps field names to new values; a field that is absent from the
patch is unset and the stored value is left alone. ``None`` is a legitimate
value (it clears a nullable field) and is distinct from unset.
"""

from typing import Any, Mapping


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class Patch:
    """Set-or-unset field map applied field by field to a stored record."""

    def __init__(self, **fields: Any):
        self._fields = {name: value for name, value in fields.items() if value is not UNSET}

    def changes_from(self, record: Mapping[str, Any]) -> "Patch":
        """The subset of this patch that would actually alter `record`."""
        return Patch(**{
            name: value
            for name, value in self._fields.items()
            if name not in record or record[name] != value
        })

    def to_set_document(self, **extra: Any) -> dict[str, Any]:
        """Body of a ``$set`` update, with bookkeeping fields such as updatedAt."""
        return {**self._fields, **extra}

    def __bool__(self) -> bool:
        return bool(self._fields)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Patch) and self._fields == other._fields

    def __repr__(self) -> str:
        return f"Patch({self._fields!r})"
