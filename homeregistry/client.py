"""HTTP client for the registry and a scenario that exercises it."""

from __future__ import annotations

import argparse
import json
import urllib.request
from typing import Any

from .models import Device, DeviceForm, House, Room

DEFAULT_BASE_URL = "http://localhost:3000"


class ApiClient:
    """Talks to a running registry server.

    Responses other than 2xx raise ``urllib.error.HTTPError``.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        data = None
        headers = {"Accept": "application/json"}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = urllib.request.Request(
            f"{self.base_url}{path}", data=data, headers=headers, method=method
        )
        with urllib.request.urlopen(req) as resp:
            return json.loads(resp.read().decode("utf-8"))

    def drop_all(self) -> bool:
        return self._request("DELETE", "/house")

    def add_house(self, name: str) -> House:
        return House.from_dict(self._request("POST", "/house", {"name": name}))

    def update_house(self, house: House) -> House:
        return House.from_dict(
            self._request("PUT", f"/houses/{house.id}", house.to_dict())
        )

    def add_room(self, house: House, name: str) -> Room:
        return Room.from_dict(
            self._request("POST", f"/houses/{house.id}/rooms", {"name": name})
        )

    def update_room(self, room: Room) -> Room:
        return Room.from_dict(
            self._request(
                "PUT", f"/houses/{room.house}/rooms/{room.id}", room.to_dict()
            )
        )

    def add_device(self, room: Room, form: DeviceForm) -> Device:
        return Device.from_dict(
            self._request(
                "POST", f"/houses/{room.house}/rooms/{room.id}/devices", form.to_dict()
            )
        )

    def update_device(self, device: Device, form: DeviceForm) -> Device:
        # A device does not know its house; the server ignores that segment.
        return Device.from_dict(
            self._request(
                "PUT",
                f"/houses/1/rooms/{device.room}/devices/{device.id}",
                form.to_dict(),
            )
        )


def _expect_name(actual: str, expected: str) -> None:
    if actual != expected:
        raise RuntimeError(f"expected name {expected!r}, server returned {actual!r}")


def run_scenario(base_url: str = DEFAULT_BASE_URL) -> Device:
    """Clear the registry, then create and rename a house, a room and a device."""
    api = ApiClient(base_url)
    if api.drop_all() is not True:
        raise RuntimeError("server did not clear the registry")

    house_name = "la casa de mi prim\u043e"
    house = api.add_house(house_name)
    _expect_name(house.name, house_name)

    renamed_house = House(id=house.id, name="la casa de mi primo updated")
    house = api.update_house(renamed_house)
    _expect_name(house.name, renamed_house.name)

    room = api.add_room(house, "cocina")
    _expect_name(room.name, "cocina")

    updated_room = api.update_room(Room(id=room.id, house=room.house, name="cocina updated"))
    _expect_name(updated_room.name, "cocina updated")

    device_name = "temperatura en el refrigorico"
    device = api.add_device(
        room, DeviceForm(name=device_name, state=False, device="termometro")
    )
    _expect_name(device.name, device_name)

    form = DeviceForm(name="hello world", state=True, device="socket")
    device = api.update_device(device, form)
    _expect_name(device.name, form.name)
    return device


def main(argv: list[str] | None = None) -> int:
    """Run the scenario against a server and print the final device."""
    parser = argparse.ArgumentParser(
        prog="homeregistry-client",
        description="Exercise a running registry server.",
    )
    parser.add_argument("--url", default=DEFAULT_BASE_URL)
    args = parser.parse_args(argv)
    device = run_scenario(args.url)
    print(json.dumps(device.to_dict(), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())