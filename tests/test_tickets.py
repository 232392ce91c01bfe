# tests/test_tickets.py
from datetime import datetime, timedelta

from conftest import register


def test_tickets_require_a_session(client):
    assert client.get("/tickets").status_code == 401
    assert client.post("/tickets", json={"title": "T1", "description": "D1"}).status_code == 401
    assert client.get("/tickets/1").status_code == 401
    assert client.post("/tickets/1/close").status_code == 401


def test_create_and_get_ticket(client):
    me = register(client, "a@x.com").json()

    r = client.post("/tickets", json={"title": "T1", "description": "D1"})
    assert r.status_code == 201
    assert r.headers["x-revalidate"] == "/tickets"
    tid = r.json()["id"]

    r2 = client.get(f"/tickets/{tid}")
    assert r2.status_code == 200
    data = r2.json()
    assert data["title"] == "T1"
    assert data["description"] == "D1"
    assert data["status"] == "OPEN"
    assert data["owner_id"] == me["id"]
    assert data["closed_at"] is None


def test_full_ticket_scenario(client):
    r = register(client, "a@x.com", "secret1")
    assert r.status_code == 201
    assert r.json()["email"] == "a@x.com"
    client.post("/auth/logout")

    r = client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["code"] == "invalid_credentials"

    r = client.post("/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert r.status_code == 200

    r = client.post("/tickets", json={"title": "Printer down", "description": "Third floor, again."})
    assert r.status_code == 201
    assert r.json()["status"] == "OPEN"
    tid = r.json()["id"]

    r = client.post(f"/tickets/{tid}/close")
    assert r.status_code == 200
    assert r.json()["status"] == "CLOSED"
    assert r.json()["closed_at"] is not None
    assert r.headers["x-revalidate"] == f"/tickets, /tickets/{tid}"

    r = client.post(f"/tickets/{tid}/close")
    assert r.status_code == 409
    assert r.json()["code"] == "already_closed"


def test_list_is_newest_first(client):
    register(client, "a@x.com")
    ids = [client.post("/tickets", json={"title": f"T{i}"}).json()["id"] for i in range(3)]

    r = client.get("/tickets")
    assert r.status_code == 200
    assert [t["id"] for t in r.json()] == list(reversed(ids))


def test_list_only_shows_own_tickets(client, other_client):
    register(client, "a@x.com")
    register(other_client, "b@x.com")

    mine = client.post("/tickets", json={"title": "Mine"}).json()
    theirs = other_client.post("/tickets", json={"title": "Theirs"}).json()

    assert [t["id"] for t in client.get("/tickets").json()] == [mine["id"]]
    assert [t["id"] for t in other_client.get("/tickets").json()] == [theirs["id"]]


def test_other_users_ticket_is_not_found(client, other_client):
    register(client, "a@x.com")
    register(other_client, "b@x.com")
    tid = client.post("/tickets", json={"title": "Private"}).json()["id"]

    r = other_client.get(f"/tickets/{tid}")
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"

    # same answer as an id that does not exist
    missing = other_client.get("/tickets/9999999")
    assert missing.json() == r.json()

    # and they cannot close it either
    assert other_client.post(f"/tickets/{tid}/close").status_code == 404
    assert client.get(f"/tickets/{tid}").json()["status"] == "OPEN"


def test_get_not_found_returns_404(client):
    register(client, "a@x.com")
    r = client.get("/tickets/9999999")
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"


def test_create_validation_errors(client):
    register(client, "a@x.com")

    # missing title
    r1 = client.post("/tickets", json={"description": "no title"})
    assert r1.status_code == 422

    # empty title
    r2 = client.post("/tickets", json={"title": "", "description": "D"})
    assert r2.status_code == 422

    # whitespace only
    r3 = client.post("/tickets", json={"title": "   ", "description": "D"})
    assert r3.status_code == 422
    assert r3.json()["code"] == "validation_error"

    assert client.get("/tickets").json() == []


def test_filter_by_status_open_only(client):
    register(client, "a@x.com")
    a = client.post("/tickets", json={"title": "A", "description": "A"}).json()
    b = client.post("/tickets", json={"title": "B", "description": "B"}).json()

    # close one of them
    client.post(f"/tickets/{b['id']}/close")

    r = client.get("/tickets?status=OPEN")
    assert r.status_code == 200
    ids = {t["id"] for t in r.json()}
    assert a["id"] in ids
    assert b["id"] not in ids

    closed = client.get("/tickets?status=CLOSED").json()
    assert [t["id"] for t in closed] == [b["id"]]

    assert client.get("/tickets?status=pending").status_code == 422


def test_id_beyond_integer_range_is_not_found(client):
    register(client, "a@x.com")
    huge = 2**64

    r = client.get(f"/tickets/{huge}")
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"
    assert client.post(f"/tickets/{huge}/close").status_code == 404


def test_timestamps_carry_utc_offset(client):
    register(client, "a@x.com")
    tid = client.post("/tickets", json={"title": "T"}).json()["id"]
    client.post(f"/tickets/{tid}/close")

    data = client.get(f"/tickets/{tid}").json()
    for key in ("created_at", "closed_at"):
        parsed = datetime.fromisoformat(data[key].replace("Z", "+00:00"))
        assert parsed.utcoffset() == timedelta(0)
