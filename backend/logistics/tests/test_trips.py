"""
Tests for trip endpoints.
"""

TRIP = {
    "passenger_id": 1,
    "from_origin": "Ogle",
    "to_destination": "NTM",
    "trip_date": "2026-11-02",
    "number_of_passengers": 2
}


def create_trip(client, headers, **overrides):
    response = client.post("/api/trips", headers=headers, json={**TRIP, **overrides})
    assert response.status_code == 201
    return response.json()


def test_trips_require_authentication(client):
    assert client.get("/api/trips").status_code == 401


def test_create_and_read_trip(client, user_headers):
    trip = create_trip(client, user_headers)
    assert trip["confirmed"] is False
    assert trip["number_of_passengers"] == 2

    response = client.get(f"/api/trips/{trip['id']}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["to_destination"] == "NTM"


def test_create_trip_rejects_invalid_passenger_counts(client, user_headers):
    for value in (0, -2, True, "2"):
        response = client.post("/api/trips", headers=user_headers, json={**TRIP, "number_of_passengers": value})
        assert response.status_code == 400
        assert response.json()["kind"] == "InvalidInput"
    assert client.get("/api/trips", headers=user_headers).json() == []


def test_create_trip_without_count(client, user_headers):
    payload = {k: v for k, v in TRIP.items() if k != "number_of_passengers"}
    response = client.post("/api/trips", headers=user_headers, json=payload)
    assert response.status_code == 201
    assert response.json()["number_of_passengers"] is None


def test_update_and_delete_trip(client, user_headers):
    trip = create_trip(client, user_headers)

    response = client.put(
        f"/api/trips/{trip['id']}",
        headers=user_headers,
        json={**TRIP, "to_destination": "NSC"}
    )
    assert response.status_code == 200
    assert response.json()["to_destination"] == "NSC"

    assert client.delete(f"/api/trips/{trip['id']}", headers=user_headers).status_code == 200
    response = client.get(f"/api/trips/{trip['id']}", headers=user_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Trip not found", "kind": "NotFound"}


def test_invalid_trip_id(client, user_headers):
    response = client.get("/api/trips/not-an-id", headers=user_headers)
    assert response.status_code == 400


def test_trips_by_passenger(client, user_headers):
    create_trip(client, user_headers, passenger_id=7)
    create_trip(client, user_headers, passenger_id=7, trip_date="2026-11-03")
    create_trip(client, user_headers, passenger_id=8)

    response = client.get("/api/trips/passenger/7", headers=user_headers)
    assert response.status_code == 200
    assert len(response.json()) == 2

    assert client.get("/api/trips/passenger/9", headers=user_headers).status_code == 404


def test_passenger_count_endpoints(client, user_headers):
    trip = create_trip(client, user_headers, number_of_passengers=1)
    base = f"/api/trips/{trip['id']}/passengers"

    response = client.patch(f"{base}/increment", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["number_of_passengers"] == 2

    response = client.patch(f"{base}/decrement", headers=user_headers)
    assert response.json()["number_of_passengers"] == 1

    response = client.patch(f"{base}/decrement", headers=user_headers)
    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidState"

    response = client.patch(f"{base}/set", headers=user_headers, json={"number_of_passengers": 5})
    assert response.status_code == 200
    assert response.json()["number_of_passengers"] == 5


def test_set_passengers_rejects_bad_values(client, user_headers):
    trip = create_trip(client, user_headers)
    url = f"/api/trips/{trip['id']}/passengers/set"

    for value in (0, -1, "three", True):
        response = client.patch(url, headers=user_headers, json={"number_of_passengers": value})
        assert response.status_code == 400
        assert response.json()["kind"] == "InvalidInput"


def test_passenger_count_endpoints_missing_trip(client, user_headers):
    for action in ("increment", "decrement"):
        response = client.patch(f"/api/trips/999/passengers/{action}", headers=user_headers)
        assert response.status_code == 404
    response = client.patch(
        "/api/trips/999/passengers/set", headers=user_headers, json={"number_of_passengers": 2}
    )
    assert response.status_code == 404


def test_confirm_trip(client, user_headers):
    trip = create_trip(client, user_headers)
    response = client.patch(f"/api/trips/{trip['id']}/confirm", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["confirmed"] is True

    # A full update leaves confirmation alone
    response = client.put(f"/api/trips/{trip['id']}", headers=user_headers, json=TRIP)
    assert response.json()["confirmed"] is True


def test_sort_order_is_per_user(client, user_headers, admin_headers):
    first = create_trip(client, user_headers)
    second = create_trip(client, user_headers)
    third = create_trip(client, user_headers)

    client.patch(f"/api/trips/{third['id']}/sort-order", headers=user_headers, json={"sort_order": 0})
    client.patch(f"/api/trips/{first['id']}/sort-order", headers=user_headers, json={"sort_order": 1})

    ids = [t["id"] for t in client.get("/api/trips", headers=user_headers).json()]
    assert ids == [third["id"], first["id"], second["id"]]

    ids = [t["id"] for t in client.get("/api/trips", headers=admin_headers).json()]
    assert ids == [first["id"], second["id"], third["id"]]


def test_full_update_keeps_passenger_count(client, user_headers):
    trip = create_trip(client, user_headers, number_of_passengers=4)
    payload = {k: v for k, v in TRIP.items() if k != "number_of_passengers"}

    response = client.put(
        f"/api/trips/{trip['id']}",
        headers=user_headers,
        json={**payload, "from_origin": "NBD"}
    )
    assert response.status_code == 200
    assert response.json()["from_origin"] == "NBD"
    assert response.json()["number_of_passengers"] == 4

    # A count sent with a full update is ignored; the counter endpoints own it
    response = client.put(
        f"/api/trips/{trip['id']}",
        headers=user_headers,
        json={**payload, "number_of_passengers": None}
    )
    assert response.json()["number_of_passengers"] == 4

    response = client.patch(f"/api/trips/{trip['id']}/passengers/increment", headers=user_headers)
    assert response.json()["number_of_passengers"] == 5
