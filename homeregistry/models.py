"""Records stored in the registry and the forms used to change them."""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

_SCHEMA = """
CREATE TABLE IF NOT EXISTS house (
    id INTEGER PRIMARY KEY NOT NULL,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS room (
    id INTEGER PRIMARY KEY NOT NULL,
    house INTEGER NOT NULL,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS device (
    id INTEGER PRIMARY KEY NOT NULL,
    room INTEGER NOT NULL,
    name TEXT NOT NULL,
    device_type TEXT NOT NULL,
    state BOOLEAN NOT NULL
);
"""


def _field(data: Any, key: str, kind: type) -> Any:
    """Fetch ``key`` from ``data`` and check that it has the expected type."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None
    if (kind is int and isinstance(value, bool)) or not isinstance(value, kind):
        raise ValueError(
            f"field `{key}` must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass
class House:
    """A house: the top of the registry."""

    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> House:
        return cls(id=_field(data, "id", int), name=_field(data, "name", str))


@dataclass
class Room:
    """A room belonging to a house."""

    id: int
    house: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Room:
        return cls(
            id=_field(data, "id", int),
            house=_field(data, "house", int),
            name=_field(data, "name", str),
        )


@dataclass
class Device:
    """A device placed in a room."""

    id: int
    room: int
    name: str
    device_type: str
    state: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Device:
        return cls(
            id=_field(data, "id", int),
            room=_field(data, "room", int),
            name=_field(data, "name", str),
            device_type=_field(data, "device_type", str),
            state=_field(data, "state", bool),
        )


@dataclass
class DeviceForm:
    """The fields a client sends to create or change a device."""

    name: str
    state: bool
    device: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DeviceForm:
        return cls(
            name=_field(data, "name", str),
            state=_field(data, "state", bool),
            device=_field(data, "device", str),
        )


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the house, room and device tables if they are missing."""
    connection.executescript(_SCHEMA)