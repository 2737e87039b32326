import pytest

from team_availability.core.calendar_window import CalendarWindow
from team_availability.core.errors import DateOutOfRange, NotFound
from team_availability.domain import ClearUnavailable, SetUnavailable
from team_availability.models.availability_mark import AvailabilityMark
from team_availability.services.availability_store import all_marks_by_person, apply_change, dates_for_person
from team_availability.services.identity_store import add_person

WINDOW = CalendarWindow(year=2026, start_month=5, end_month=9)
DAY = "2026-06-05"


@pytest.fixture
def person(db):
    row = add_person(db, "Alice", "x", person_id="alice")
    db.commit()
    return row


def _count(db, person_id: str, date: str) -> int:
    return db.query(AvailabilityMark).filter_by(person_id=person_id, date=date).count()


def test_set_unavailable_twice_leaves_one_mark(db, person) -> None:
    assert apply_change(db, SetUnavailable(person.id, DAY), WINDOW) is True
    assert apply_change(db, SetUnavailable(person.id, DAY), WINDOW) is False
    assert _count(db, person.id, DAY) == 1


def test_clear_absent_mark_is_successful_noop(db, person) -> None:
    assert apply_change(db, ClearUnavailable(person.id, DAY), WINDOW) is False
    assert _count(db, person.id, DAY) == 0


def test_toggle_round_trip_restores_original_set(db, person) -> None:
    apply_change(db, SetUnavailable(person.id, "2026-06-01"), WINDOW)
    before = dates_for_person(db, person.id)

    apply_change(db, SetUnavailable(person.id, DAY), WINDOW)
    apply_change(db, ClearUnavailable(person.id, DAY), WINDOW)

    assert dates_for_person(db, person.id) == before == ["2026-06-01"]


def test_unknown_person_is_not_found(db) -> None:
    with pytest.raises(NotFound):
        apply_change(db, SetUnavailable("ghost", DAY), WINDOW)
    with pytest.raises(NotFound):
        dates_for_person(db, "ghost")


def test_dates_outside_window_are_rejected(db, person) -> None:
    with pytest.raises(DateOutOfRange):
        apply_change(db, SetUnavailable(person.id, "2026-12-24"), WINDOW)
    assert db.query(AvailabilityMark).count() == 0


def test_all_marks_includes_people_without_marks(db, person) -> None:
    add_person(db, "Bob", "y", person_id="bob")
    db.commit()
    apply_change(db, SetUnavailable(person.id, "2026-06-07"), WINDOW)
    apply_change(db, SetUnavailable(person.id, DAY), WINDOW)

    assert all_marks_by_person(db) == {"alice": [DAY, "2026-06-07"], "bob": []}
