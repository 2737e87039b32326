import asyncio

import httpx
import pytest

from team_availability.client.api import AvailabilityApi
from team_availability.client.session import AvailabilitySession, Mode
from team_availability.core.errors import ConfirmationRequired, Forbidden, InvalidCredential
from team_availability.services.conflicts import ConflictMode, HighlightState

from fakes import FakeClock


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def make_session(app_with_db):
    clock = FakeClock()

    def _make() -> AvailabilitySession:
        api = AvailabilityApi("http://testserver", transport=httpx.ASGITransport(app=app_with_db))
        return AvailabilitySession(api, clock=clock)

    return _make


def test_login_toggle_and_drag_against_live_app(make_session) -> None:
    async def scenario():
        session = make_session()
        await session.load_window()
        identity = await session.login("Alice", "pw")
        assert session.mode is Mode.PERSONAL

        await session.toggle("2026-06-01")
        session.drag_start("2026-06-12")
        session.drag_enter("2026-06-10")
        await session.finish_drag()
        local = session.my_dates()

        # A fresh client sees the same server state
        other = make_session()
        await other.login("alice", "pw")
        await session.api.aclose()
        await other.api.aclose()
        return identity, local, other.my_dates()

    identity, local, remote = run(scenario())
    assert identity.name == "Alice"
    assert local == remote == ["2026-06-01", "2026-06-10", "2026-06-11", "2026-06-12"]


def test_wrong_secret_is_surfaced(make_session) -> None:
    async def scenario():
        session = make_session()
        await session.login("Alice", "pw")
        session.logout()
        try:
            await session.login("Alice", "nope")
        finally:
            await session.api.aclose()

    with pytest.raises(InvalidCredential):
        run(scenario())


def test_toggle_outside_personal_mode_is_noop(make_session) -> None:
    async def scenario():
        session = make_session()
        changed = await session.toggle("2026-06-01")
        await session.api.aclose()
        return changed, session.my_dates()

    assert run(scenario()) == (False, [])


def test_admin_view_classifies_and_removes(make_session, admin_secret) -> None:
    async def scenario():
        people = {}
        for name in ("A", "B", "C"):
            s = make_session()
            people[name] = await s.login(name, name.lower())
            if name != "C":
                await s.toggle("2026-06-10")
            await s.api.aclose()

        admin = make_session()
        await admin.load_window()
        admin.start_admin_login()
        assert admin.mode is Mode.ADMIN_LOGIN
        await admin.admin_login(admin_secret)
        assert admin.mode is Mode.ADMIN

        any_ = admin.conflicts(["2026-06-10", "2026-06-11"], ConflictMode.ANY)
        all_before = admin.conflicts(["2026-06-10"], ConflictMode.ALL)
        states = admin.highlight_states(["2026-06-10"])

        with pytest.raises(ConfirmationRequired):
            await admin.remove_person(people["C"].id, "")
        await admin.remove_person(people["C"].id, "c")
        all_after = admin.conflicts(["2026-06-10"], ConflictMode.ALL)
        exported = await admin.export()

        # Admin is not a participant: no edits possible
        edited = await admin.toggle("2026-06-15")
        await admin.api.aclose()
        return any_, all_before, states, all_after, exported, edited

    any_, all_before, states, all_after, exported, edited = run(scenario())
    assert any_ == {"2026-06-10": True, "2026-06-11": False}
    assert all_before == {"2026-06-10": False}
    assert states == {"2026-06-10": HighlightState.ANY}
    assert all_after == {"2026-06-10": True}
    assert [p["name"] for p in exported["people"]] == ["A", "B"]
    assert edited is False


def test_privileged_operations_need_admin_mode(make_session) -> None:
    async def scenario():
        session = make_session()
        try:
            await session.export()
        finally:
            await session.api.aclose()

    with pytest.raises(Forbidden):
        run(scenario())


def test_health(make_session) -> None:
    async def scenario():
        session = make_session()
        ok = await session.api.health()
        await session.api.aclose()
        return ok

    assert run(scenario()) is True
