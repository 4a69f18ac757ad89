"""Integration tests for /api/appointments and the emails they trigger."""

from datetime import datetime

import pytest

from tattoo_workshop.models.appointment import Appointment

from helpers import make_customer

WHEN = "2030-05-06T14:30:00"


@pytest.fixture
def customer(session):
    return make_customer(session)


@pytest.fixture
def appointment(client, staff_headers, customer, recording_queue):
    response = client.post(
        "/api/appointments",
        headers=staff_headers,
        json={
            "customer_id": customer.id,
            "artist_name": "Sarah Chen",
            "appointment_date": WHEN,
            "duration": 120,
            "notes": "Traditional rose design on shoulder",
        },
    )
    assert response.status_code == 201
    recording_queue.jobs.clear()
    return response.json()


class TestCreate:
    def test_create_queues_confirmation(self, client, staff_headers, customer, recording_queue):
        response = client.post(
            "/api/appointments",
            headers=staff_headers,
            json={
                "customer_id": customer.id,
                "artist_name": "Sarah Chen",
                "appointment_date": WHEN,
                "duration": 120,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "scheduled"
        assert recording_queue.jobs == [("confirmation", body["id"], None)]

    def test_unknown_customer(self, client, staff_headers, recording_queue):
        response = client.post(
            "/api/appointments",
            headers=staff_headers,
            json={
                "customer_id": 999,
                "artist_name": "Sarah Chen",
                "appointment_date": WHEN,
                "duration": 60,
            },
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Customer not found"
        assert recording_queue.jobs == []

    def test_duration_must_be_positive(self, client, staff_headers, customer):
        response = client.post(
            "/api/appointments",
            headers=staff_headers,
            json={
                "customer_id": customer.id,
                "artist_name": "Sarah Chen",
                "appointment_date": WHEN,
                "duration": 0,
            },
        )

        assert response.status_code == 400

    def test_requires_authentication(self, client, customer):
        assert client.get("/api/appointments").status_code == 401


class TestUpdateNotifications:
    def test_cancelling_queues_one_cancellation(
        self, client, staff_headers, appointment, recording_queue
    ):
        url = f"/api/appointments/{appointment['id']}"

        response = client.put(url, headers=staff_headers, json={"status": "cancelled"})
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

        # Already cancelled: saving again must not send a second email
        client.put(url, headers=staff_headers, json={"status": "cancelled", "notes": "No show"})

        assert recording_queue.kinds() == ["cancellation"]

    def test_cancel_and_move_sends_only_cancellation(
        self, client, staff_headers, appointment, recording_queue
    ):
        client.put(
            f"/api/appointments/{appointment['id']}",
            headers=staff_headers,
            json={"status": "cancelled", "appointment_date": "2030-05-08T10:00:00"},
        )

        assert recording_queue.kinds() == ["cancellation"]

    def test_moving_date_queues_rescheduling_with_old_date(
        self, client, staff_headers, appointment, recording_queue
    ):
        response = client.put(
            f"/api/appointments/{appointment['id']}",
            headers=staff_headers,
            json={"appointment_date": "2030-05-08T10:00:00"},
        )

        assert response.status_code == 200
        assert response.json()["appointment_date"] == "2030-05-08T10:00:00"
        assert recording_queue.jobs == [
            ("rescheduled", appointment["id"], datetime(2030, 5, 6, 14, 30))
        ]

    def test_same_date_and_other_fields_queue_nothing(
        self, client, staff_headers, appointment, recording_queue
    ):
        client.put(
            f"/api/appointments/{appointment['id']}",
            headers=staff_headers,
            json={"appointment_date": WHEN, "artist_name": "Mike Rodriguez", "status": "completed"},
        )

        assert recording_queue.jobs == []

    def test_update_unknown(self, client, staff_headers):
        response = client.put(
            "/api/appointments/999", headers=staff_headers, json={"status": "cancelled"}
        )

        assert response.status_code == 404


class TestQueries:
    def test_list_joins_customer_and_filters_status(
        self, client, session, staff_headers, appointment, customer
    ):
        client.post(
            "/api/appointments",
            headers=staff_headers,
            json={
                "customer_id": customer.id,
                "artist_name": "Alex Thompson",
                "appointment_date": "2030-06-01T12:00:00",
                "duration": 90,
            },
        )
        client.put(
            f"/api/appointments/{appointment['id']}",
            headers=staff_headers,
            json={"status": "completed"},
        )

        everything = client.get("/api/appointments", headers=staff_headers).json()
        assert [a["artist_name"] for a in everything] == ["Alex Thompson", "Sarah Chen"]
        assert everything[0]["customer_name"] == "Alice Johnson"
        assert everything[0]["customer_email"] == "alice@example.com"

        completed = client.get(
            "/api/appointments", headers=staff_headers, params={"status": "completed"}
        ).json()
        assert [a["id"] for a in completed] == [appointment["id"]]

    def test_get_and_delete(self, client, staff_headers, appointment):
        url = f"/api/appointments/{appointment['id']}"

        assert client.get(url, headers=staff_headers).json()["artist_name"] == "Sarah Chen"
        assert client.delete(url, headers=staff_headers).status_code == 200
        assert client.get(url, headers=staff_headers).status_code == 404

    def test_date_is_stored_as_naive_local_time(self, client, session, staff_headers, appointment):
        stored = session.get(Appointment, appointment["id"])

        assert stored.appointment_date == datetime(2030, 5, 6, 14, 30)
        assert stored.appointment_date.tzinfo is None
        url = f"/api/appointments/{appointment['id']}"
        assert client.get(url, headers=staff_headers).json()["appointment_date"] == WHEN
