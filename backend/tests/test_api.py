from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from team_availability.core.constants import ADMIN_SECRET_HEADER, PARTICIPANT_SECRET_HEADER
from team_availability.services.identity_store import add_person


def _login(client, name="Alice", secret="s3cret") -> dict:
    r = client.post("/api/auth/login", json={"name": name, "secret": secret})
    assert r.status_code == 200, r.text
    return r.json()


def test_health_has_no_state_dependency(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/health").json() == {"status": "ok"}


def test_calendar_window(client) -> None:
    body = client.get("/api/calendar").json()
    assert body["first_day"] == "2026-05-01"
    assert body["last_day"] == "2026-09-30"
    assert len(body["months"]) == 5


def test_login_and_people_never_expose_secrets(client) -> None:
    alice = _login(client)
    assert set(alice) == {"id", "name", "color"}

    people = client.get("/api/people").json()
    assert people == [alice]


def test_login_errors_are_surfaced_verbatim(client) -> None:
    _login(client)

    r = client.post("/api/auth/login", json={"name": "alice", "secret": "wrong"})
    assert r.status_code == 401
    assert r.json()["error"] == "invalid_credential"

    r = client.post("/api/auth/login", json={"name": "", "secret": "x"})
    assert r.status_code == 422
    assert r.json()["error"] == "missing_field"


def test_set_and_clear_are_idempotent(client) -> None:
    alice = _login(client)
    headers = {PARTICIPANT_SECRET_HEADER: "s3cret"}
    url = f"/api/availability/{alice['id']}/2026-06-05"

    assert client.put(url, headers=headers).json() == {"ok": True, "changed": True}
    assert client.put(url, headers=headers).json() == {"ok": True, "changed": False}
    assert client.get(f"/api/availability/{alice['id']}").json() == ["2026-06-05"]

    assert client.delete(url, headers=headers).json() == {"ok": True, "changed": True}
    assert client.delete(url, headers=headers).json() == {"ok": True, "changed": False}
    assert client.get(f"/api/availability/{alice['id']}").json() == []


def test_participant_cannot_write_someone_elses_marks(client) -> None:
    alice = _login(client)
    _login(client, "Bob", "bobpw")

    r = client.put(f"/api/availability/{alice['id']}/2026-06-05", headers={PARTICIPANT_SECRET_HEADER: "bobpw"})
    assert r.status_code == 403
    r = client.put(f"/api/availability/{alice['id']}/2026-06-05")
    assert r.status_code == 403
    assert client.get(f"/api/availability/{alice['id']}").json() == []


def test_unclaimed_identity_refuses_writes_until_login(client, db) -> None:
    add_person(db, "Kevin", None, person_id="2", color="#10b981")
    db.commit()

    for headers in ({}, {PARTICIPANT_SECRET_HEADER: "anything"}):
        r = client.put("/api/availability/2/2026-06-05", headers=headers)
        assert r.status_code == 403
        assert r.json()["error"] == "forbidden"
        assert client.delete("/api/availability/2/2026-06-05", headers=headers).status_code == 403
    assert client.get("/api/availability/2").json() == []

    assert _login(client, "kevin", "kpw")["id"] == "2"
    r = client.put("/api/availability/2/2026-06-05", headers={PARTICIPANT_SECRET_HEADER: "kpw"})
    assert r.status_code == 200
    assert client.get("/api/availability/2").json() == ["2026-06-05"]


def test_write_owner_lookup_failure_is_503(client) -> None:
    alice = _login(client)
    boom = OperationalError("SELECT people", {}, Exception("database is locked"))
    with patch("team_availability.api.deps.require_person", side_effect=boom):
        r = client.put(f"/api/availability/{alice['id']}/2026-06-05", headers={PARTICIPANT_SECRET_HEADER: "s3cret"})
    assert r.status_code == 503
    assert r.json()["error"] == "store_unavailable"


def test_out_of_window_and_unknown_person(client) -> None:
    alice = _login(client)
    r = client.put(f"/api/availability/{alice['id']}/2026-12-01", headers={PARTICIPANT_SECRET_HEADER: "s3cret"})
    assert r.status_code == 422
    assert r.json()["error"] == "date_out_of_range"

    assert client.get("/api/availability/ghost").status_code == 404


def test_privileged_view_requires_admin_secret(client, admin_secret) -> None:
    assert client.get("/api/availability").status_code == 422
    assert client.get("/api/availability", headers={ADMIN_SECRET_HEADER: "nope"}).status_code == 401

    assert client.post("/api/auth/admin", json={"secret": "nope"}).status_code == 401
    assert client.post("/api/auth/admin", json={"secret": admin_secret}).json() == {"ok": True}


def test_conflicts_any_and_all(client, admin_secret) -> None:
    admin = {ADMIN_SECRET_HEADER: admin_secret}
    people = [_login(client, n, n + "pw") for n in ("A", "B", "C")]
    for p in people[:2]:
        client.put(f"/api/availability/{p['id']}/2026-06-10", headers={PARTICIPANT_SECRET_HEADER: p["name"] + "pw"})

    snapshot = client.get("/api/availability", headers=admin).json()
    assert snapshot == {people[0]["id"]: ["2026-06-10"], people[1]["id"]: ["2026-06-10"], people[2]["id"]: []}

    any_ = client.get("/api/conflicts", params={"mode": "any"}, headers=admin).json()
    assert any_["flagged"] == ["2026-06-10"]
    assert any_["states"]["2026-06-10"] == "any"

    all_ = client.get("/api/conflicts", params={"mode": "all"}, headers=admin).json()
    assert all_["flagged"] == []

    client.put(f"/api/availability/{people[2]['id']}/2026-06-10", headers={PARTICIPANT_SECRET_HEADER: "Cpw"})
    all_ = client.get("/api/conflicts", params={"mode": "all"}, headers=admin).json()
    assert all_["flagged"] == ["2026-06-10"]
    assert all_["states"]["2026-06-10"] == "all"


def test_admin_removal_and_export(client, admin_secret) -> None:
    admin = {ADMIN_SECRET_HEADER: admin_secret}
    x = _login(client, "Xavier", "x")
    client.put(f"/api/availability/{x['id']}/2026-06-01", headers={PARTICIPANT_SECRET_HEADER: "x"})
    client.put(f"/api/availability/{x['id']}/2026-06-02", headers={PARTICIPANT_SECRET_HEADER: "x"})

    r = client.delete(f"/api/admin/people/{x['id']}", headers=admin)
    assert r.status_code == 409
    assert client.get(f"/api/availability/{x['id']}").json() == ["2026-06-01", "2026-06-02"]

    r = client.delete(f"/api/admin/people/{x['id']}", params={"confirm": "Xavier"}, headers=admin)
    assert r.json() == {"ok": True, "person_id": x["id"], "marks_deleted": 2}

    export = client.get("/api/admin/export", headers=admin).json()
    assert export["people"] == []
    assert export["availability"] == {}
    assert client.delete(f"/api/admin/people/{x['id']}", params={"confirm": "Xavier"}, headers=admin).status_code == 404
