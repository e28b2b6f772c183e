"""Helpers for moving dataclasses to and from wire dictionaries."""

from dataclasses import MISSING, Field, fields
from typing import Any, Dict, FrozenSet, Iterable

EXTRAS_FIELD = "extras"
NULLS_FIELD = "wire_nulls"

# Dataclass fields that never map to a wire key of the same name
LOCAL_FIELDS = frozenset({EXTRAS_FIELD, NULLS_FIELD, "payload", "residual"})


def unknown_fields(cls: Any, data: Dict[str, Any], also_known: Iterable[str] = ()) -> Dict[str, Any]:
    """Wire fields ``cls`` does not model, kept so they can be re-emitted."""
    known = {f.name for f in fields(cls) if f.name not in LOCAL_FIELDS} | set(also_known)
    return {k: v for k, v in data.items() if k not in known}


def null_keys(data: Dict[str, Any]) -> FrozenSet[str]:
    """Keys the wire sent as an explicit ``null``."""
    return frozenset(k for k, v in data.items() if v is None)


def _is_unset(f: Field, value: Any) -> bool:
    if value is None:
        return True
    return f.default_factory is not MISSING and value == f.default_factory()  # type: ignore[misc]


def dump(obj: Any, **overrides: Any) -> Dict[str, Any]:
    """
    Serialize a dataclass: modelled fields, then ``overrides``, then
    whatever unknown wire fields it carried.

    ``None`` fields are dropped unless the decoded payload had the key as
    ``null``; those are re-emitted as ``null`` while still unset.
    """
    nulls = getattr(obj, NULLS_FIELD, frozenset())
    result: Dict[str, Any] = {}
    for f in fields(obj):
        if f.name in (EXTRAS_FIELD, NULLS_FIELD):
            continue
        if f.name in nulls and _is_unset(f, getattr(obj, f.name)):
            overrides.pop(f.name, None)
            result[f.name] = None
            continue
        value = overrides.pop(f.name, getattr(obj, f.name))
        if value is not None:
            result[f.name] = value
    result.update(overrides)
    result.update(getattr(obj, EXTRAS_FIELD, None) or {})
    return result
