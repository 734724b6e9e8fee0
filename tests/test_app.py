from unittest import mock

import pytest
from flask import Flask

from homeregistry.app import create_app, main
from homeregistry.store import Store

COUSIN_HOUSE = "la casa de mi prim\u043e"


@pytest.fixture
def store():
    with Store(":memory:") as st:
        yield st


@pytest.fixture
def client(store):
    return create_app(store).test_client()


def _new_house(client, name=COUSIN_HOUSE):
    resp = client.post("/house", json={"name": name})
    assert resp.status_code == 200
    return resp.get_json()


def test_add_and_update_ops(client):
    assert client.delete("/house").status_code == 200

    house = _new_house(client)
    assert house["name"] == COUSIN_HOUSE

    resp = client.put(
        f"/houses/{house['id']}",
        json={"id": house["id"], "name": "la casa de mi primo updated"},
    )
    assert resp.status_code == 200
    upd_house = resp.get_json()
    assert upd_house == {"id": house["id"], "name": "la casa de mi primo updated"}

    resp = client.post(f"/houses/{upd_house['id']}/rooms", json={"name": "cocina"})
    assert resp.status_code == 200
    room = resp.get_json()
    assert room["name"] == "cocina"
    assert room["house"] == upd_house["id"]

    resp = client.put(
        f"/houses/{room['house']}/rooms/{room['id']}",
        json={**room, "name": "cocina updated"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["name"] == "cocina updated"

    resp = client.post(
        f"/houses/{room['house']}/rooms/{room['id']}/devices",
        json={"name": "temperatura en el refrigorico", "state": False, "device": "termometro"},
    )
    assert resp.status_code == 200
    device = resp.get_json()
    assert device["name"] == "temperatura en el refrigorico"
    assert device["device_type"] == "termometro"

    resp = client.put(
        f"/houses/1/rooms/{device['room']}/devices/{device['id']}",
        json={"name": "hello world", "state": True, "device": "socket"},
    )
    assert resp.status_code == 200
    assert resp.get_json() == {
        "id": device["id"],
        "room": room["id"],
        "name": "hello world",
        "device_type": "socket",
        "state": True,
    }


def test_list_houses(client):
    first = _new_house(client, "a")
    second = _new_house(client, "b")
    resp = client.get("/house")
    assert resp.get_json() == [first, second]


def test_drop_all_returns_true_and_empties(client):
    _new_house(client)
    resp = client.delete("/house")
    assert resp.get_json() is True
    assert client.get("/house").get_json() == []


def test_delete_house_returns_count_as_string(client):
    house = _new_house(client)
    assert client.delete(f"/houses/{house['id']}").get_json() == "1"
    assert client.delete(f"/houses/{house['id']}").get_json() == "0"


def test_new_device_always_starts_off(client):
    house = _new_house(client)
    room = client.post(f"/houses/{house['id']}/rooms", json={"name": "r"}).get_json()
    device = client.post(
        f"/houses/{house['id']}/rooms/{room['id']}/devices",
        json={"name": "lamp", "state": True, "device": "socket"},
    ).get_json()
    assert device["state"] is False
    listed = client.get(f"/houses/{house['id']}/rooms/{room['id']}/devices").get_json()
    assert listed == [device]


def test_rooms_listed_per_house(client):
    a = _new_house(client, "a")
    b = _new_house(client, "b")
    room = client.post(f"/houses/{a['id']}/rooms", json={"name": "x"}).get_json()
    client.post(f"/houses/{b['id']}/rooms", json={"name": "y"})
    assert client.get(f"/houses/{a['id']}/rooms").get_json() == [room]


def test_delete_room_and_device(client):
    house = _new_house(client)
    room = client.post(f"/houses/{house['id']}/rooms", json={"name": "r"}).get_json()
    base = f"/houses/{house['id']}/rooms/{room['id']}"
    device = client.post(
        f"{base}/devices", json={"name": "d", "state": False, "device": "t"}
    ).get_json()
    assert client.delete(f"{base}/devices/{device['id']}").get_json() == "1"
    assert client.delete(base).get_json() == "1"
    assert client.get(f"/houses/{house['id']}/rooms").get_json() == []


def test_update_missing_house_is_server_error(client):
    resp = client.put("/houses/999", json={"name": "nope"})
    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Record not found"


def test_missing_content_type_is_415(client):
    resp = client.post("/house", data='{"name": "x"}')
    assert resp.status_code == 415


def test_malformed_json_is_400(client):
    resp = client.post("/house", data="{not json", content_type="application/json")
    assert resp.status_code == 400


def test_missing_field_is_422(client):
    resp = client.post("/house", json={"title": "x"})
    assert resp.status_code == 422
    assert "name" in resp.get_data(as_text=True)


def test_bad_device_form_is_422(client):
    house = _new_house(client)
    room = client.post(f"/houses/{house['id']}/rooms", json={"name": "r"}).get_json()
    resp = client.post(
        f"/houses/{house['id']}/rooms/{room['id']}/devices",
        json={"name": "d", "state": "on", "device": "t"},
    )
    assert resp.status_code == 422


def test_main_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with mock.patch("homeregistry.app.load_dotenv", return_value=False):
        with pytest.raises(SystemExit) as excinfo:
            main([])
    assert excinfo.value.code == 2


def test_main_serves_with_database(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("DATABASE_URL", str(tmp_path / "db.sqlite"))
    with mock.patch("homeregistry.app.load_dotenv", return_value=False), mock.patch.object(
        Flask, "run"
    ) as run:
        assert main(["--port", "3456"]) == 0
    run.assert_called_once_with(host="127.0.0.1", port=3456)
    assert "Server started at http://localhost:3456" in capsys.readouterr().out
    assert (tmp_path / "db.sqlite").exists()