"""SQLite-backed storage of houses, rooms and devices."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from .models import Device, DeviceForm, House, Room, create_schema

T = TypeVar("T")

_HOUSE_COLUMNS = "id, name"
_ROOM_COLUMNS = "id, house, name"
_DEVICE_COLUMNS = "id, room, name, device_type, state"


class StoreError(Exception):
    """Raised when the database cannot carry out a request."""


def _house(row: tuple[Any, ...]) -> House:
    return House(id=row[0], name=row[1])


def _room(row: tuple[Any, ...]) -> Room:
    return Room(id=row[0], house=row[1], name=row[2])


def _device(row: tuple[Any, ...]) -> Device:
    return Device(
        id=row[0], room=row[1], name=row[2], device_type=row[3], state=bool(row[4])
    )


class Store:
    """All registry operations over one SQLite database."""

    def __init__(self, database_url: str) -> None:
        try:
            self._conn = sqlite3.connect(
                database_url,
                uri=database_url.startswith("file:"),
                check_same_thread=False,
                isolation_level=None,
            )
            create_schema(self._conn)
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        self._lock = threading.Lock()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> Store:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        with self._lock:
            try:
                yield self._conn.cursor()
            except sqlite3.Error as exc:
                raise StoreError(str(exc)) from exc

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> int:
        with self._cursor() as cur:
            cur.execute(sql, params)
            return cur.rowcount

    def _all(
        self, sql: str, params: tuple[Any, ...], make: Callable[[tuple[Any, ...]], T]
    ) -> list[T]:
        with self._cursor() as cur:
            return [make(row) for row in cur.execute(sql, params)]

    def _first(
        self, sql: str, params: tuple[Any, ...], make: Callable[[tuple[Any, ...]], T]
    ) -> T:
        with self._cursor() as cur:
            row = cur.execute(sql + " ORDER BY id LIMIT 1", params).fetchone()
        if row is None:
            raise StoreError("Record not found")
        return make(row)

    # houses

    def list_houses(self) -> list[House]:
        return self._all(f"SELECT {_HOUSE_COLUMNS} FROM house ORDER BY id", (), _house)

    def add_house(self, name: str) -> House:
        self._execute("INSERT INTO house (name) VALUES (?)", (name,))
        return self._first(
            f"SELECT {_HOUSE_COLUMNS} FROM house WHERE name = ?", (name,), _house
        )

    def upd_house(self, house_id: int, name: str) -> House:
        self._execute("UPDATE house SET name = ? WHERE id = ?", (name, house_id))
        return self._first(
            f"SELECT {_HOUSE_COLUMNS} FROM house WHERE id = ?", (house_id,), _house
        )

    def del_house(self, house_id: int) -> int:
        return self._execute("DELETE FROM house WHERE id = ?", (house_id,))

    # rooms

    def get_rooms(self, house_id: int) -> list[Room]:
        return self._all(
            f"SELECT {_ROOM_COLUMNS} FROM room WHERE house = ? ORDER BY id",
            (house_id,),
            _room,
        )

    def add_room(self, house_id: int, name: str) -> Room:
        self._execute("INSERT INTO room (house, name) VALUES (?, ?)", (house_id, name))
        return self._first(
            f"SELECT {_ROOM_COLUMNS} FROM room WHERE house = ? AND name = ?",
            (house_id, name),
            _room,
        )

    def upd_room(self, house_id: int, room_id: int, name: str) -> Room:
        self._execute("UPDATE room SET name = ? WHERE id = ?", (name, room_id))
        return self._first(
            f"SELECT {_ROOM_COLUMNS} FROM room WHERE house = ? AND name = ?",
            (house_id, name),
            _room,
        )

    def del_room(self, room_id: int) -> int:
        return self._execute("DELETE FROM room WHERE id = ?", (room_id,))

    # devices

    def get_devices(self, room_id: int) -> list[Device]:
        return self._all(
            f"SELECT {_DEVICE_COLUMNS} FROM device WHERE room = ? ORDER BY id",
            (room_id,),
            _device,
        )

    def add_device(self, room_id: int, form: DeviceForm) -> Device:
        """Add a device to a room; new devices always start switched off."""
        self._execute(
            "INSERT INTO device (room, name, device_type, state) VALUES (?, ?, ?, ?)",
            (room_id, form.name, form.device, False),
        )
        return self._first(
            f"SELECT {_DEVICE_COLUMNS} FROM device WHERE room = ? AND name = ?",
            (room_id, form.name),
            _device,
        )

    def upd_device(self, room_id: int, device_id: int, form: DeviceForm) -> Device:
        self._execute(
            "UPDATE device SET name = ?, state = ?, device_type = ? "
            "WHERE id = ? AND room = ?",
            (form.name, form.state, form.device, device_id, room_id),
        )
        return self._first(
            f"SELECT {_DEVICE_COLUMNS} FROM device "
            "WHERE id = ? AND room = ? AND name = ?",
            (device_id, room_id, form.name),
            _device,
        )

    def del_device(self, room_id: int, device_id: int) -> int:
        return self._execute(
            "DELETE FROM device WHERE id = ? AND room = ?", (device_id, room_id)
        )

    def drop_all(self) -> bool:
        """Remove every device, room and house."""
        for table in ("device", "room", "house"):
            self._execute(f"DELETE FROM {table}")
        return True