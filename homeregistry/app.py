"""HTTP interface to the registry."""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from .models import DeviceForm
from .store import Store, StoreError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


class _Rejection(Exception):
    """A request body that cannot be accepted."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _json_body() -> Any:
    if not request.is_json:
        raise _Rejection(
            415, "Expected request with `Content-Type: application/json`"
        )
    try:
        return json.loads(request.get_data())
    except ValueError as exc:
        raise _Rejection(
            400, f"Failed to parse the request body as JSON: {exc}"
        ) from exc


def _name_form() -> str:
    data = _json_body()
    if not isinstance(data, Mapping):
        raise _Rejection(422, "Failed to deserialize the JSON body: expected an object")
    name = data.get("name")
    if name is None:
        raise _Rejection(422, "Failed to deserialize the JSON body: missing field `name`")
    if not isinstance(name, str):
        raise _Rejection(
            422, "Failed to deserialize the JSON body: field `name` must be a string"
        )
    return name


def _device_form() -> DeviceForm:
    data = _json_body()
    try:
        return DeviceForm.from_dict(data)
    except ValueError as exc:
        raise _Rejection(422, f"Failed to deserialize the JSON body: {exc}") from exc


def create_app(store: Store) -> Flask:
    """Build the web application serving ``store``."""
    app = Flask(__name__)

    @app.errorhandler(StoreError)
    def _store_error(exc: StoreError) -> Response:
        return _text(str(exc), 500)

    @app.errorhandler(_Rejection)
    def _rejected(exc: _Rejection) -> Response:
        return _text(exc.message, exc.status)

    @app.get("/house")
    def list_houses() -> Response:
        return jsonify([house.to_dict() for house in store.list_houses()])

    @app.post("/house")
    def add_house() -> Response:
        return jsonify(store.add_house(_name_form()).to_dict())

    @app.delete("/house")
    def drop_all() -> Response:
        return jsonify(store.drop_all())

    @app.put("/houses/<int(signed=True):house_id>")
    def upd_house(house_id: int) -> Response:
        return jsonify(store.upd_house(house_id, _name_form()).to_dict())

    @app.delete("/houses/<int(signed=True):house_id>")
    def del_house(house_id: int) -> Response:
        return jsonify(str(store.del_house(house_id)))

    @app.get("/houses/<int(signed=True):house_id>/rooms")
    def get_rooms(house_id: int) -> Response:
        return jsonify([room.to_dict() for room in store.get_rooms(house_id)])

    @app.post("/houses/<int(signed=True):house_id>/rooms")
    def add_room(house_id: int) -> Response:
        return jsonify(store.add_room(house_id, _name_form()).to_dict())

    @app.put("/houses/<int(signed=True):house_id>/rooms/<int(signed=True):room_id>")
    def upd_room(house_id: int, room_id: int) -> Response:
        return jsonify(store.upd_room(house_id, room_id, _name_form()).to_dict())

    @app.delete("/houses/<int(signed=True):house_id>/rooms/<int(signed=True):room_id>")
    def del_room(house_id: int, room_id: int) -> Response:
        return jsonify(str(store.del_room(room_id)))

    @app.get("/houses/<int(signed=True):house_id>/rooms/<int(signed=True):room_id>/devices")
    def get_devices(house_id: int, room_id: int) -> Response:
        return jsonify([device.to_dict() for device in store.get_devices(room_id)])

    @app.post("/houses/<int(signed=True):house_id>/rooms/<int(signed=True):room_id>/devices")
    def add_device(house_id: int, room_id: int) -> Response:
        return jsonify(store.add_device(room_id, _device_form()).to_dict())

    @app.put(
        "/houses/<int(signed=True):house_id>/rooms/<int(signed=True):room_id>"
        "/devices/<int(signed=True):device_id>"
    )
    def upd_device(house_id: int, room_id: int, device_id: int) -> Response:
        return jsonify(store.upd_device(room_id, device_id, _device_form()).to_dict())

    @app.delete(
        "/houses/<int(signed=True):house_id>/rooms/<int(signed=True):room_id>"
        "/devices/<int(signed=True):device_id>"
    )
    def del_device(house_id: int, room_id: int, device_id: int) -> Response:
        return jsonify(str(store.del_device(room_id, device_id)))

    return app


def main(argv: list[str] | None = None) -> int:
    """Serve the registry over HTTP using the database named by DATABASE_URL."""
    parser = argparse.ArgumentParser(
        prog="homeregistry", description="Serve the house registry over HTTP."
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    load_dotenv()
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        parser.error("DATABASE_URL must be set")

    with Store(database_url) as store:
        app = create_app(store)
        print(f"Server started at http://localhost:{args.port}")
        print("Run example in terminal")
        print("> python -m homeregistry.client")
        app.run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())