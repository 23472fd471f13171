"""Public/private partitions of a user entity.

Each partition has a fixed set of reserved fields modeled as named
attributes. Arbitrary caller fields live in `fields` and are merged
underneath the reserved ones when serialized, so reserved values always
take precedence.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from domain.user.core.exceptions.user_errors import InvalidUserPropertiesError

PUBLIC = "public"
PRIVATE = "private"

_MISSING = object()


class _Partition:
    """Mapping-like access shared by both partitions."""

    RESERVED: ClassVar[Tuple[str, ...]] = ()
    READ_ONLY: ClassVar[Tuple[str, ...]] = ()
    fields: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Any:
        """Split a raw mapping into reserved attributes and free fields."""
        data = copy.deepcopy(dict(data or {}))
        reserved = {name: data.pop(name) for name in cls.RESERVED if name in data}
        return cls(fields=data, **reserved)

    def to_dict(self) -> Dict[str, Any]:
        result = dict(self.fields)
        for name in self.RESERVED:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result

    def get(self, key: str, default: Any = None) -> Any:
        return self.to_dict().get(key, default)

    def update(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            self[key] = value

    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self.READ_ONLY:
            raise InvalidUserPropertiesError(f"'{key}' cannot be set")
        if key in self.RESERVED:
            setattr(self, key, value)
        else:
            self.fields[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.to_dict()


@dataclass
class PublicPartition(_Partition):
    """Broadly readable fields, plus the id and audit timestamps.

    Examples:
        >>> public = PublicPartition.from_dict({"name": "A", "id": "x"})
        >>> public.id = "u1"
        >>> public.to_dict()
        {'name': 'A', 'id': 'u1'}
    """

    RESERVED: ClassVar[Tuple[str, ...]] = ("id", "created_at", "updated_at")
    READ_ONLY: ClassVar[Tuple[str, ...]] = ("id",)
    AUDIT: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at")

    id: Optional[str] = None
    created_at: Any = None
    updated_at: Any = None
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PrivatePartition(_Partition):
    """Sensitive fields, including the registered email."""

    RESERVED: ClassVar[Tuple[str, ...]] = ("email",)

    email: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)


def _partition_data(properties: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    data = properties.get(name)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise InvalidUserPropertiesError(f"'{name}' must be a mapping, got {type(data).__name__}")
    return data


def _as_mapping(properties: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if properties is None:
        return {}
    if not isinstance(properties, Mapping):
        raise InvalidUserPropertiesError(
            f"properties must be a mapping, got {type(properties).__name__}"
        )
    return properties


def normalize_properties(
    key: str, properties: Optional[Mapping[str, Any]]
) -> Tuple[PublicPartition, PrivatePartition]:
    """Build the canonical two-partition shape from raw data.

    Pure function: the input is copied, never mutated. Any top-level `id`
    is discarded and the key becomes `public.id`. Missing partitions are
    treated as empty.

    Args:
        key: Entity key in the store
        properties: Raw `{"public": {...}, "private": {...}}` data

    Returns:
        Tuple of (public, private) partitions

    Raises:
        InvalidUserPropertiesError: If properties or a partition is not a mapping

    Examples:
        >>> public, private = normalize_properties("u1", {"id": "old"})
        >>> public.to_dict(), private.to_dict()
        ({'id': 'u1'}, {})
    """
    properties = _as_mapping(properties)
    public = PublicPartition.from_dict(_partition_data(properties, PUBLIC))
    private = PrivatePartition.from_dict(_partition_data(properties, PRIVATE))
    public.id = key
    return public, private


def with_private_email(properties: Optional[Mapping[str, Any]], email: str) -> Dict[str, Any]:
    """Return a copy of properties whose `private.email` is email.

    Any email already present in the private partition is overwritten.

    Examples:
        >>> with_private_email({"private": {"email": "old@x.com"}}, "a@x.com")
        {'private': {'email': 'a@x.com'}}
    """
    properties = _as_mapping(properties)
    result = copy.deepcopy(dict(properties))
    private = dict(_partition_data(properties, PRIVATE))
    private["email"] = email
    result[PRIVATE] = copy.deepcopy(private)
    return result
