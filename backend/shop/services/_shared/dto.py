# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import asdict, fields, is_dataclass
from typing import Any, TypeVar

T = TypeVar("T")


def from_row(dto_type: type[T], row: Any) -> T:
    """
    Build a DTO from a mapped row by copying same-named attributes.

    :param dto_type: Frozen dataclass describing the output contract.
    :type dto_type: type[T]
    :param row: ORM instance exposing every DTO field as an attribute.
    :type row: Any
    :returns: A new DTO instance.
    :rtype: T
    """
    if not is_dataclass(dto_type):
        raise TypeError(f"{dto_type!r} is not a dataclass")
    return dto_type(**{f.name: getattr(row, f.name) for f in fields(dto_type)})


def to_values(dto: Any) -> dict[str, Any]:
    """
    Return the fields of a dataclass instance as a plain dict.

    :param dto: Dataclass instance (command or info).
    :type dto: Any
    :returns: Field name to value mapping.
    :rtype: dict[str, Any]
    """
    return asdict(dto)


def field_names(dto_type: type[Any]) -> tuple[str, ...]:
    """Return the declared field names of a dataclass type, in order."""
    return tuple(f.name for f in fields(dto_type))
