# homeregistry

A small JSON-over-HTTP service for a registry of houses, the rooms in them
and the devices in those rooms. Data is kept in an SQLite database; the
tables are created on first use.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

The server reads the database location from the `DATABASE_URL` environment
variable; a `.env` file in the working directory is read too. The value is a
file path, or an SQLite URI starting with `file:`.

```
DATABASE_URL=homes.db homeregistry-server
```

By default it listens on `127.0.0.1:3000`. Use `--host` and `--port` to
change that:

```
DATABASE_URL=homes.db homeregistry-server --host 0.0.0.0 --port 8080
```

If `DATABASE_URL` is not set, the command stops with an error.

## Endpoints

| Method | Path                                                    | Action                              |
|--------|---------------------------------------------------------|-------------------------------------|
| GET    | `/house`                                                | list all houses                     |
| POST   | `/house`                                                | add a house `{"name": ...}`         |
| DELETE | `/house`                                                | delete every device, room and house |
| PUT    | `/houses/{house_id}`                                    | rename a house `{"name": ...}`      |
| DELETE | `/houses/{house_id}`                                    | delete a house                      |
| GET    | `/houses/{house_id}/rooms`                              | list rooms of a house               |
| POST   | `/houses/{house_id}/rooms`                              | add a room `{"name": ...}`          |
| PUT    | `/houses/{house_id}/rooms/{room_id}`                    | rename a room `{"name": ...}`       |
| DELETE | `/houses/{house_id}/rooms/{room_id}`                    | delete a room                       |
| GET    | `/houses/{house_id}/rooms/{room_id}/devices`            | list devices of a room              |
| POST   | `/houses/{house_id}/rooms/{room_id}/devices`            | add a device                        |
| PUT    | `/houses/{house_id}/rooms/{room_id}/devices/{device_id}`| update a device                     |
| DELETE | `/houses/{house_id}/rooms/{room_id}/devices/{device_id}`| delete a device                     |

Records come back as JSON objects:

- house: `{"id": 1, "name": "..."}`
- room: `{"id": 1, "house": 1, "name": "..."}`
- device: `{"id": 1, "room": 1, "name": "...", "device_type": "...", "state": false}`

A device form looks like `{"name": "thermometer", "state": false, "device": "termometro"}`.
New devices always start switched off, whatever `state` the form holds; an
update sets name, state and type. For device routes the `house_id` segment is
not checked. Delete routes answer with the number of removed rows as a JSON
string, e.g. `"1"`; `DELETE /house` answers `true`.

Errors:

- a body without `Content-Type: application/json` gets status 415;
- a body that is not valid JSON gets 400;
- a body with missing or wrongly typed fields gets 422;
- database failures, and updates or inserts whose record cannot be read back,
  get 500 with the error text (`Record not found` in the latter case).

After adding or renaming, the record is read back by its name (and house or
room), so when several records share a name the one with the lowest id is
returned.

## Trying it out

With the server running, the demo client clears the registry, then adds and
renames a house, a room and a device, checks each answer and prints the final
device:

```
homeregistry-demo
homeregistry-demo --url http://localhost:8080
```

From Python:

```python
from homeregistry.client import ApiClient, run_scenario
from homeregistry.models import DeviceForm

client = ApiClient("http://localhost:3000")
client.drop_all()
house = client.add_house("my house")
room = client.add_room(house, "kitchen")
device = client.add_device(room, DeviceForm(name="lamp", state=False, device="socket"))
device = client.update_device(device, DeviceForm(name="lamp", state=True, device="socket"))
```

`ApiClient` raises `urllib.error.HTTPError` for any answer that is not 2xx.
`run_scenario(base_url)` runs the same steps as the demo command.

## Using the storage directly

`homeregistry.store.Store` offers the same operations without HTTP and can be
used as a context manager:

```python
from homeregistry.store import Store

with Store("homes.db") as store:
    house = store.add_house("my house")
    room = store.add_room(house.id, "kitchen")
    print(store.get_rooms(house.id))
```

Database errors raise `homeregistry.store.StoreError`. The record types
`House`, `Room`, `Device` and `DeviceForm` live in `homeregistry.models`, each
with `to_dict()` and `from_dict()`.

## Limitations

- There is no link enforced between tables: deleting a house leaves its rooms,
  and deleting a room leaves its devices, in place. Only `DELETE /house`
  clears everything.
- Houses and rooms cannot be fetched one at a time; list them instead.
- There is no authentication.