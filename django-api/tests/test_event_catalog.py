"""Integration tests for the events API.

Run with: pytest tests/test_event_catalog.py -v
"""

from datetime import timedelta

import pytest
from django.core.cache import cache
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from civic_events import models as orm
from civic_events.cache import available_events_key
from civic_events.domain import DeliveryMode, EventStatus

MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def organizer(make_db_person):
    return make_db_person("Olga", "Organizadora")


@pytest.fixture
def make_fair(organizer, today):
    def _make(status=EventStatus.CONFIRMED, start_date=None, duration_days=1, name="Feria") -> orm.Fair:
        fair = orm.Fair.objects.create(
            name=name,
            start_date=start_date or today,
            duration_days=duration_days,
            status=status.value,
            stand_count=10,
        )
        fair.organizers.set([organizer])
        return fair

    return _make


@pytest.fixture
def make_workshop(organizer, make_db_person, today):
    def _make(capacity: int, status=EventStatus.CONFIRMED) -> orm.Workshop:
        workshop = orm.Workshop.objects.create(
            name="Ceramics",
            start_date=today + timedelta(days=7),
            status=status.value,
            max_capacity=capacity,
            instructor=make_db_person("Jorge", "Torno"),
            delivery_mode=DeliveryMode.IN_PERSON.value,
        )
        workshop.organizers.set([organizer])
        return workshop

    return _make


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_lists_only_events_open_for_enrollment(self, api_client: APIClient, make_fair, today):
        open_fair = make_fair(name="Open")
        make_fair(status=EventStatus.PLANNED, name="Planned")
        make_fair(start_date=today - timedelta(days=10), duration_days=3, name="Stale")
        make_fair(status=EventStatus.FINISHED, name="Finished")

        response = api_client.get(reverse("event-list"))

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(open_fair.id)]

    def test_list_events_empty_catalog(self, api_client: APIClient):
        """Given no events, returns empty list."""
        response = api_client.get(reverse("event-list"))
        assert response.status_code == 200
        assert response.json() == []

    def test_list_events_cached_response(self, api_client: APIClient, today):
        """Given cached data, returns from cache."""
        cache.set(available_events_key(today), [{"id": "cached"}])
        response = api_client.get(reverse("event-list"))
        assert response.json() == [{"id": "cached"}]

    def test_date_window_filters_by_start_date(self, api_client: APIClient, make_fair, today):
        make_fair(name="Today")
        inside = make_fair(start_date=today + timedelta(days=3), name="Inside")
        make_fair(start_date=today + timedelta(days=9), name="Later")

        response = api_client.get(
            reverse("event-list"),
            {"from": (today + timedelta(days=1)).isoformat(), "to": (today + timedelta(days=5)).isoformat()},
        )

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(inside.id)]
        assert cache.get(available_events_key(today)) is None

    def test_date_window_open_end(self, api_client: APIClient, make_fair, today):
        make_fair(name="Today")
        later = make_fair(start_date=today + timedelta(days=9), name="Later")

        response = api_client.get(reverse("event-list"), {"from": (today + timedelta(days=1)).isoformat()})

        assert [item["id"] for item in response.json()] == [str(later.id)]

    def test_inverted_date_window_is_rejected(self, api_client: APIClient, today):
        response = api_client.get(
            reverse("event-list"), {"from": today.isoformat(), "to": (today - timedelta(days=1)).isoformat()}
        )
        assert response.status_code == 400
        assert "date_to" in response.json()

    def test_event_payload(self, api_client: APIClient, make_workshop):
        workshop = make_workshop(capacity=5)

        item = api_client.get(reverse("event-list")).json()[0]

        assert item["id"] == str(workshop.id)
        assert item["kind"] == "Workshop"
        assert item["status"] == "Confirmed"
        assert item["effective_state"] == "Confirmed"
        assert item["capacity"] == 5
        assert item["available_slots"] == 5
        assert item["availability"] == "5/5 available"
        assert item["details"]["delivery_mode"] == "InPerson"
        assert item["details"]["instructor"]["full_name"] == "Jorge Torno"
        assert item["organizers"][0]["full_name"] == "Olga Organizadora"


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details(self, api_client: APIClient, make_fair, today):
        fair = make_fair(start_date=today - timedelta(days=5))

        response = api_client.get(reverse("event-detail", args=[fair.id]))

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Feria"
        assert data["status"] == "Confirmed"
        assert data["effective_state"] == "Ended"
        assert data["availability"] == "Unlimited"
        assert data["available_slots"] is None
        assert data["details"] == {"stand_count": 10, "outdoor": False}

    def test_get_event_not_found(self, api_client: APIClient):
        """Given event does not exist, returns 404."""
        response = api_client.get(reverse("event-detail", args=[MISSING_ID]))
        assert response.status_code == 404
        assert response.json()["code"] == "EVENT_NOT_FOUND"

    def test_get_event_invalid_id_format(self, api_client: APIClient):
        """Given invalid UUID, returns 400."""
        response = api_client.get(reverse("event-detail", args=["not-a-uuid"]))
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"

    def test_uuid_spellings_share_fresh_entry(self, api_client: APIClient, make_workshop, make_db_person):
        workshop = make_workshop(capacity=3)
        upper_url = reverse("event-detail", args=[str(workshop.id).upper()])
        hex_url = reverse("event-detail", args=[workshop.id.hex])
        assert api_client.get(upper_url).json()["available_slots"] == 3
        assert api_client.get(hex_url).json()["available_slots"] == 3

        api_client.post(
            reverse("enrollment-create", args=[workshop.id]), {"person_id": str(make_db_person().id)}, format="json"
        )

        assert api_client.get(upper_url).json()["available_slots"] == 2
        assert api_client.get(hex_url).json()["available_slots"] == 2


@pytest.mark.django_db
class TestCreateEvent:
    """Tests for POST /api/events"""

    def test_creates_film_series(self, api_client: APIClient, organizer, today):
        payload = {
            "name": "Cine de barrio",
            "start_date": (today + timedelta(days=3)).isoformat(),
            "duration_days": 4,
            "kind": "FilmSeries",
            "organizer_ids": [str(organizer.id)],
            "films": [{"title": "Zama", "projection_order": 2}, {"title": "Nueve reinas", "projection_order": 1}],
            "post_screening_talks": True,
        }

        response = api_client.post(reverse("event-list"), payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Planned"
        assert [film["title"] for film in data["details"]["films"]] == ["Nueve reinas", "Zama"]
        assert orm.FilmSeries.objects.filter(pk=data["id"]).exists()

    def test_returns_first_violated_rule(self, api_client: APIClient, organizer, today):
        payload = {
            "name": "Ceramics",
            "start_date": today.isoformat(),
            "duration_days": 1,
            "kind": "Workshop",
            "organizer_ids": [str(organizer.id)],
        }

        response = api_client.post(reverse("event-list"), payload, format="json")

        assert response.status_code == 400
        assert response.json() == {
            "field": "capacity",
            "code": "CAPACITY_INVALID",
            "message": "Capacity must be a positive number.",
        }
        assert not orm.Event.objects.exists()

    def test_unknown_organizer(self, api_client: APIClient, today):
        payload = {
            "name": "Feria",
            "start_date": today.isoformat(),
            "duration_days": 1,
            "kind": "Fair",
            "organizer_ids": [MISSING_ID],
            "stand_count": 3,
        }

        response = api_client.post(reverse("event-list"), payload, format="json")

        assert response.status_code == 404
        assert response.json()["code"] == "PERSON_NOT_FOUND"

    def test_malformed_date_is_a_format_error(self, api_client: APIClient):
        response = api_client.post(reverse("event-list"), {"start_date": "tomorrow"}, format="json")
        assert response.status_code == 400
        assert "start_date" in response.json()

    def test_response_uses_local_date(self, api_client: APIClient, organizer, today, monkeypatch):
        monkeypatch.setattr(timezone, "localdate", lambda *args, **kwargs: today + timedelta(days=30))
        payload = {
            "name": "Feria",
            "start_date": today.isoformat(),
            "duration_days": 1,
            "kind": "Fair",
            "organizer_ids": [str(organizer.id)],
            "stand_count": 3,
        }

        response = api_client.post(reverse("event-list"), payload, format="json")

        assert response.status_code == 201
        assert response.json()["effective_state"] == "Ended"


@pytest.mark.django_db
class TestStatusChange:
    """Tests for POST /api/events/{id}/status"""

    def test_organizer_confirms_event(self, api_client: APIClient, make_fair, organizer):
        fair = make_fair(status=EventStatus.PLANNED)

        response = api_client.post(
            reverse("event-status", args=[fair.id]), {"actor_id": str(organizer.id)}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Confirmed"
        fair.refresh_from_db()
        assert fair.status == "Confirmed"

    def test_stranger_is_rejected(self, api_client: APIClient, make_fair, make_db_person):
        fair = make_fair(status=EventStatus.PLANNED)
        stranger = make_db_person("Sam", "Stranger")

        response = api_client.post(
            reverse("event-status", args=[fair.id]), {"actor_id": str(stranger.id)}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "NOT_AN_ORGANIZER"

    def test_response_uses_local_date(self, api_client: APIClient, make_fair, organizer, today, monkeypatch):
        fair = make_fair(status=EventStatus.PLANNED)
        monkeypatch.setattr(timezone, "localdate", lambda *args, **kwargs: today + timedelta(days=30))

        response = api_client.post(
            reverse("event-status", args=[fair.id]), {"actor_id": str(organizer.id)}, format="json"
        )

        assert response.json()["status"] == "Confirmed"
        assert response.json()["effective_state"] == "Ended"


@pytest.mark.django_db
class TestEnrollment:
    """Tests for POST /api/events/{id}/enrollments"""

    def test_enrolls_person(self, api_client: APIClient, make_workshop, make_db_person):
        workshop = make_workshop(capacity=5)
        person = make_db_person("Pablo", "Participante")

        response = api_client.post(
            reverse("enrollment-create", args=[workshop.id]), {"person_id": str(person.id)}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["person"]["id"] == str(person.id)
        assert orm.Participant.objects.filter(event=workshop, person=person).count() == 1

    def test_full_workshop_is_a_conflict(self, api_client: APIClient, make_workshop, make_db_person):
        workshop = make_workshop(capacity=1)
        url = reverse("enrollment-create", args=[workshop.id])
        api_client.post(url, {"person_id": str(make_db_person().id)}, format="json")

        response = api_client.post(url, {"person_id": str(make_db_person().id)}, format="json")

        assert response.status_code == 409
        assert response.json() == {"code": "NO_CAPACITY", "message": "no capacity available", "ended_on": None}

    def test_duplicate_enrollment(self, api_client: APIClient, make_fair, make_db_person):
        fair = make_fair()
        person = make_db_person()
        url = reverse("enrollment-create", args=[fair.id])
        api_client.post(url, {"person_id": str(person.id)}, format="json")

        response = api_client.post(url, {"person_id": str(person.id)}, format="json")

        assert response.status_code == 409
        assert response.json()["message"] == "already enrolled"
        assert orm.Participant.objects.filter(event=fair).count() == 1

    def test_organizer_cannot_enroll(self, api_client: APIClient, make_fair, organizer):
        fair = make_fair()

        response = api_client.post(
            reverse("enrollment-create", args=[fair.id]), {"person_id": str(organizer.id)}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "ORGANIZER_CONFLICT"

    def test_ended_event_reports_end_date(self, api_client: APIClient, make_fair, make_db_person, today):
        fair = make_fair(start_date=today - timedelta(days=10), duration_days=3)

        response = api_client.post(
            reverse("enrollment-create", args=[fair.id]), {"person_id": str(make_db_person().id)}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["ended_on"] == (today - timedelta(days=8)).isoformat()

    def test_unknown_person(self, api_client: APIClient, make_fair):
        fair = make_fair()
        response = api_client.post(
            reverse("enrollment-create", args=[fair.id]), {"person_id": MISSING_ID}, format="json"
        )
        assert response.status_code == 404

    def test_invalid_event_id(self, api_client: APIClient, make_db_person):
        response = api_client.post(
            reverse("enrollment-create", args=["nope"]), {"person_id": str(make_db_person().id)}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"


@pytest.mark.django_db
class TestEligibility:
    """Tests for GET /api/events/{id}/eligibility"""

    def test_allowed(self, api_client: APIClient, make_fair, make_db_person):
        fair = make_fair()
        person = make_db_person()

        response = api_client.get(reverse("event-eligibility", args=[fair.id]), {"person_id": str(person.id)})

        assert response.status_code == 200
        assert response.json() == {"allowed": True, "rejection": None}
        assert not orm.Participant.objects.exists()

    def test_refused(self, api_client: APIClient, make_fair, make_db_person):
        fair = make_fair(status=EventStatus.PLANNED)

        response = api_client.get(
            reverse("event-eligibility", args=[fair.id]), {"person_id": str(make_db_person().id)}
        )

        assert response.json()["allowed"] is False
        assert response.json()["rejection"]["message"] == "not yet confirmed"

    def test_missing_person_id(self, api_client: APIClient, make_fair):
        response = api_client.get(reverse("event-eligibility", args=[make_fair().id]))
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PERSON_ID"


@pytest.mark.django_db
class TestPeople:
    """Tests for GET /api/people, national id lookup and GET /api/people/{id}/events"""

    def test_search(self, api_client: APIClient, make_db_person):
        make_db_person("Ana", "Pereyra")
        make_db_person("Bruno", "Diaz")

        response = api_client.get(reverse("person-list"), {"search": "ana"})

        assert [person["full_name"] for person in response.json()] == ["Ana Pereyra"]

    def test_organizer_events(self, api_client: APIClient, make_fair, organizer):
        fair = make_fair(status=EventStatus.PLANNED)

        response = api_client.get(reverse("organizer-events", args=[organizer.id]))

        assert response.status_code == 200
        assert [event["id"] for event in response.json()] == [str(fair.id)]

    def test_organizer_events_unknown_person(self, api_client: APIClient):
        response = api_client.get(reverse("organizer-events", args=[MISSING_ID]))
        assert response.status_code == 404

    def test_find_by_national_id(self, api_client: APIClient, make_db_person):
        person = make_db_person("Ana", "Pereyra")

        response = api_client.get(reverse("person-by-national-id", args=[person.national_id]))

        assert response.status_code == 200
        assert response.json()["id"] == str(person.id)

    def test_unknown_national_id(self, api_client: APIClient):
        response = api_client.get(reverse("person-by-national-id", args=["99999999"]))
        assert response.status_code == 404
        assert response.json()["code"] == "PERSON_NOT_FOUND"


@pytest.mark.django_db
class TestRegisterPerson:
    """Tests for POST /api/people"""

    payload = {
        "first_name": "Lucia",
        "last_name": "Gomez",
        "national_id": "34111222",
        "phone": "11 5555-0000",
        "email": "lucia@example.com",
    }

    def test_registers_person(self, api_client: APIClient):
        response = api_client.post(reverse("person-list"), self.payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["full_name"] == "Lucia Gomez"
        assert data["national_id"] == "34111222"
        assert orm.Person.objects.filter(pk=data["id"], email="lucia@example.com").exists()

    def test_duplicate_national_id_is_a_conflict(self, api_client: APIClient):
        api_client.post(reverse("person-list"), self.payload, format="json")

        response = api_client.post(reverse("person-list"), {**self.payload, "first_name": "Otra"}, format="json")

        assert response.status_code == 409
        assert response.json()["code"] == "NATIONAL_ID_TAKEN"
        assert orm.Person.objects.count() == 1

    def test_missing_field_is_reported(self, api_client: APIClient):
        response = api_client.post(reverse("person-list"), {**self.payload, "phone": ""}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "PHONE_REQUIRED"
        assert not orm.Person.objects.exists()

    def test_malformed_email_is_a_format_error(self, api_client: APIClient):
        response = api_client.post(reverse("person-list"), {**self.payload, "email": "nope"}, format="json")
        assert response.status_code == 400
        assert "email" in response.json()


def fair_payload(organizer, actor, **overrides) -> dict:
    return {
        "actor_id": str(actor.id),
        "name": "Feria renovada",
        "start_date": (timezone.localdate() + timedelta(days=2)).isoformat(),
        "duration_days": 2,
        "kind": "Fair",
        "organizer_ids": [str(organizer.id)],
        "stand_count": 25,
        **overrides,
    }


@pytest.mark.django_db
class TestUpdateEvent:
    """Tests for PUT /api/events/{id}"""

    def test_organizer_updates_event(self, api_client: APIClient, make_fair, organizer):
        fair = make_fair()
        url = reverse("event-detail", args=[fair.id])
        assert api_client.get(url).json()["name"] == "Feria"

        response = api_client.put(url, fair_payload(organizer, organizer), format="json")

        assert response.status_code == 200
        assert response.json()["status"] == "Confirmed"
        assert response.json()["details"] == {"stand_count": 25, "outdoor": False}
        assert api_client.get(url).json()["name"] == "Feria renovada"

    def test_actor_is_kept_as_organizer(self, api_client: APIClient, make_fair, organizer, make_db_person):
        fair = make_fair()
        co_organizer = make_db_person("Bruno", "Diaz")

        response = api_client.put(
            reverse("event-detail", args=[fair.id]), fair_payload(co_organizer, organizer), format="json"
        )

        assert {person["id"] for person in response.json()["organizers"]} == {str(organizer.id), str(co_organizer.id)}

    def test_stranger_is_rejected(self, api_client: APIClient, make_fair, make_db_person):
        fair = make_fair()
        stranger = make_db_person("Sam", "Stranger")

        response = api_client.put(
            reverse("event-detail", args=[fair.id]), fair_payload(stranger, stranger), format="json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "NOT_AN_ORGANIZER"
        fair.refresh_from_db()
        assert fair.name == "Feria"

    def test_invalid_change_is_reported(self, api_client: APIClient, make_fair, organizer):
        fair = make_fair()

        response = api_client.put(
            reverse("event-detail", args=[fair.id]), fair_payload(organizer, organizer, name=" "), format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "NAME_REQUIRED"

    def test_unknown_event(self, api_client: APIClient, organizer):
        response = api_client.put(
            reverse("event-detail", args=[MISSING_ID]), fair_payload(organizer, organizer), format="json"
        )
        assert response.status_code == 404


@pytest.mark.django_db
class TestDeleteEvent:
    """Tests for DELETE /api/events/{id}"""

    def test_organizer_deletes_event(self, api_client: APIClient, make_fair, organizer, make_db_person):
        fair = make_fair()
        orm.Participant.objects.create(event=fair, person=make_db_person(), enrolled_at=timezone.now())
        url = reverse("event-detail", args=[fair.id])
        api_client.get(url)

        response = api_client.delete(url, {"actor_id": str(organizer.id)}, format="json")

        assert response.status_code == 204
        assert not orm.Event.objects.filter(pk=fair.id).exists()
        assert not orm.Participant.objects.exists()
        assert api_client.get(url).status_code == 404

    def test_stranger_is_rejected(self, api_client: APIClient, make_fair, make_db_person):
        fair = make_fair()

        response = api_client.delete(
            reverse("event-detail", args=[fair.id]), {"actor_id": str(make_db_person().id)}, format="json"
        )

        assert response.status_code == 409
        assert orm.Event.objects.filter(pk=fair.id).exists()
