"""Tests for the events API."""

import uuid
from datetime import date
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from airmates.database import DEFAULT_EVENT_TYPES, seed_event_types
from airmates.models.event import Event
from airmates.models.roommate import Roommate
from airmates.schemas.event import EventCreate, EventUpdate
from airmates.services.event_service import EventService, month_bounds

URL = "/api/v1/events"


def add_event(session, creator_id, name, event_date):
    event = Event(name=name, event_date=event_date, created_by=creator_id)
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


class TestEventSchema:
    def test_datetime_is_normalised_to_date(self):
        payload = EventCreate(name="Rent", event_date="2026-10-18T21:30:00Z")
        assert payload.event_date == date(2026, 10, 18)

    def test_defaults_and_blank_notes(self):
        payload = EventCreate(name="  Rent  ", event_date="2026-10-18", notes="   ")
        assert payload.name == "Rent"
        assert payload.event_type == "General"
        assert payload.notes is None

    @pytest.mark.parametrize("field", ["name", "event_type"])
    def test_blank_required_fields(self, field):
        data = {"name": "Rent", "event_date": "2026-10-18", "event_type": "Bill"}
        data[field] = "   "
        with pytest.raises(ValidationError):
            EventCreate(**data)


class TestCreateEvent:
    """POST /events"""

    def test_creates_event_for_current_user(self, client, me, my_headers):
        response = client.post(
            URL,
            json={
                "name": "Electricity bill due",
                "event_date": "2026-11-05T10:00:00",
                "notes": "",
                "event_type": "Bill",
            },
            headers=my_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Event added successfully."
        assert body["event"]["event_date"] == "2026-11-05"
        assert body["event"]["notes"] is None
        assert body["event"]["event_type"] == "Bill"
        assert body["event"]["created_by"] == str(me.id)

    def test_missing_date_is_rejected(self, client, my_headers):
        response = client.post(URL, json={"name": "Party"}, headers=my_headers)
        assert response.status_code == 422

    def test_requires_login(self, client):
        response = client.post(URL, json={"name": "Party", "event_date": "2026-11-05"})
        assert response.status_code == 401


class TestUpdateEvent:
    """PUT /events/{id}"""

    def test_updates_own_event(self, client, session, me, my_headers):
        event = add_event(session, me.id, "Cleaning", date(2026, 10, 1))

        response = client.put(
            f"{URL}/{event.id}",
            json={
                "name": "Deep cleaning",
                "event_date": "2026-10-02",
                "notes": "Kitchen first",
                "event_type": "Cleaning",
            },
            headers=my_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Event updated successfully."
        assert body["event"]["id"] == str(event.id)
        assert body["event"]["name"] == "Deep cleaning"
        assert body["event"]["event_date"] == "2026-10-02"
        assert body["event"]["notes"] == "Kitchen first"

    def test_cannot_update_someone_elses_event(self, client, session, my_headers, make_profile):
        other = make_profile("other@example.com")
        event = add_event(session, other.id, "Party", date(2026, 10, 1))

        response = client.put(
            f"{URL}/{event.id}",
            json={"name": "Hijacked", "event_date": "2026-10-01"},
            headers=my_headers,
        )

        assert response.status_code == 404
        session.expire_all()
        assert session.get(Event, event.id).name == "Party"

    def test_unknown_event(self, client, my_headers):
        response = client.put(
            f"{URL}/{uuid.uuid4()}",
            json={"name": "Ghost", "event_date": "2026-10-01"},
            headers=my_headers,
        )
        assert response.status_code == 404


class TestListEvents:
    """GET /events"""

    def test_lists_month_for_me_and_my_roommates(self, client, session, me, my_headers, make_profile):
        friend = make_profile("friend@example.com")
        stranger = make_profile("stranger@example.com")
        session.add(Roommate(user_id=me.id, name="Friend", email="friend@example.com"))
        session.commit()

        add_event(session, me.id, "Rent", date(2026, 10, 31))
        add_event(session, friend.id, "Friend party", date(2026, 10, 3))
        add_event(session, stranger.id, "Stranger party", date(2026, 10, 4))
        add_event(session, me.id, "Next month", date(2026, 11, 1))

        response = client.get(URL, params={"year": 2026, "month": 10}, headers=my_headers)

        assert response.status_code == 200
        assert [e["name"] for e in response.json()] == ["Friend party", "Rent"]

    def test_invalid_month(self, client, my_headers):
        response = client.get(URL, params={"year": 2026, "month": 13}, headers=my_headers)
        assert response.status_code == 422


class TestEventTypes:
    """GET /events/types"""

    def test_seeded_types_sorted(self, client, session, my_headers):
        assert seed_event_types(session) == len(DEFAULT_EVENT_TYPES)
        assert seed_event_types(session) == 0

        response = client.get(f"{URL}/types", headers=my_headers)

        assert response.status_code == 200
        names = [t["name"] for t in response.json()]
        assert names == sorted(DEFAULT_EVENT_TYPES)


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2026, 1, (date(2026, 1, 1), date(2026, 2, 1))),
        (2026, 12, (date(2026, 12, 1), date(2027, 1, 1))),
    ],
)
def test_month_bounds(year, month, expected):
    assert month_bounds(year, month) == expected


class TestEventServiceSaveFailure:
    """EventService with the database replaced by mocks."""

    def make_service(self, event_repo):
        return EventService(event_repo, MagicMock(), MagicMock())

    def test_create_failure(self):
        event_repo = MagicMock()
        event_repo.create.side_effect = OperationalError("INSERT", {}, Exception("db down"))
        session = MagicMock()

        with pytest.raises(HTTPException) as exc_info:
            self.make_service(event_repo).create_event(
                session,
                MagicMock(id=uuid.uuid4()),
                EventCreate(name="Rent", event_date="2026-10-18"),
            )

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Failed to save event. Please try again."
        session.rollback.assert_called_once()

    def test_update_failure(self):
        user = MagicMock(id=uuid.uuid4())
        event_repo = MagicMock()
        event_repo.get_by_id.return_value = Event(
            name="Rent", event_date=date(2026, 10, 1), created_by=user.id
        )
        event_repo.update.side_effect = OperationalError("UPDATE", {}, Exception("db down"))
        session = MagicMock()

        with pytest.raises(HTTPException) as exc_info:
            self.make_service(event_repo).update_event(
                session,
                user,
                uuid.uuid4(),
                EventUpdate(name="Rent", event_date="2026-10-02"),
            )

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Failed to save event. Please try again."
        session.rollback.assert_called_once()
