"""
API tests using FastAPI's TestClient.

Use case dependencies are overridden with use cases wired to the in-memory
repositories, so the routes, schemas and exception handlers run for real
without a database. The lifespan is not entered, so no scheduler is started.
"""

from datetime import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from medreminder.api.dependencies import get_di_container
from medreminder.config.settings import Settings
from medreminder.core.app_factory import create_app
from medreminder.domains.appointments.api.dependencies import (
    get_available_slots_use_case,
    get_book_appointment_use_case,
    get_cancel_appointment_use_case,
    get_confirm_appointment_use_case,
)
from medreminder.domains.appointments.application.use_cases import (
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    ConfirmAppointmentUseCase,
    GetAvailableSlotsUseCase,
)
from medreminder.domains.appointments.domain.services.slot_finder import ClinicHours
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentStatus
from medreminder.domains.medications.api.dependencies import (
    get_adherence_use_case,
    get_create_medication_use_case,
    get_link_channel_use_case,
)
from medreminder.domains.medications.application.use_cases import (
    CreateMedicationUseCase,
    GetAdherenceUseCase,
    LinkNotificationChannelUseCase,
)

API = "/api/v1"


@pytest.fixture
def app(
    clock,
    user_repository,
    medication_repository,
    dose_record_repository,
    appointment_repository,
    patient,
    doctor,
):
    application = create_app(Settings(ENVIRONMENT="test", SCHEDULER_ENABLED=False))

    container = MagicMock()
    container.get_clock.return_value = clock
    overrides = {
        get_di_container: lambda: container,
        get_book_appointment_use_case: lambda: BookAppointmentUseCase(appointment_repository, user_repository, clock),
        get_confirm_appointment_use_case: lambda: ConfirmAppointmentUseCase(appointment_repository),
        get_cancel_appointment_use_case: lambda: CancelAppointmentUseCase(appointment_repository),
        get_available_slots_use_case: lambda: GetAvailableSlotsUseCase(
            appointment_repository, ClinicHours.from_strings()
        ),
        get_create_medication_use_case: lambda: CreateMedicationUseCase(medication_repository, user_repository),
        get_link_channel_use_case: lambda: LinkNotificationChannelUseCase(user_repository, medication_repository),
        get_adherence_use_case: lambda: GetAdherenceUseCase(dose_record_repository, clock),
    }
    application.dependency_overrides.update(overrides)
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


# ============================================================================
# Health
# ============================================================================


@pytest.mark.api
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "environment": "test", "scheduler_running": False}


# ============================================================================
# Appointments
# ============================================================================


@pytest.mark.api
def test_book_appointment(client, patient, doctor):
    response = client.post(
        f"{API}/appointments",
        json={
            "patient_id": patient.id,
            "doctor_id": doctor.id,
            "appointment_date": "2025-03-11",
            "start_time": "10:00",
            "end_time": "10:45",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["duration_minutes"] == 45
    assert body["status"] == "scheduled"
    assert body["end_time"] == "10:45:00"
    assert "X-Correlation-ID" in response.headers


@pytest.mark.api
def test_book_overlapping_appointment_returns_400(client, make_appointment, patient, doctor):
    make_appointment(start=time(10, 0), duration=30)

    response = client.post(
        f"{API}/appointments",
        json={
            "patient_id": patient.id,
            "doctor_id": doctor.id,
            "appointment_date": "2025-03-11",
            "start_time": "10:15",
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] is True
    assert body["code"] == "APPOINTMENT_CONFLICT"


@pytest.mark.api
def test_book_with_invalid_type_returns_400(client, patient, doctor):
    response = client.post(
        f"{API}/appointments",
        json={
            "patient_id": patient.id,
            "doctor_id": doctor.id,
            "appointment_date": "2025-03-11",
            "start_time": "10:00",
            "appointment_type": "teleportation",
        },
    )

    assert response.status_code == 400
    assert response.json()["details"]["field"] == "appointment_type"


@pytest.mark.api
def test_book_with_out_of_range_duration_returns_422(client, patient, doctor):
    response = client.post(
        f"{API}/appointments",
        json={
            "patient_id": patient.id,
            "doctor_id": doctor.id,
            "appointment_date": "2025-03-11",
            "start_time": "10:00",
            "duration_minutes": 5,
        },
    )

    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"


@pytest.mark.api
def test_confirm_missing_appointment_returns_404(client):
    response = client.post(f"{API}/appointments/999/confirm")

    assert response.status_code == 404


@pytest.mark.api
def test_cancel_completed_appointment_returns_409(client, make_appointment):
    appointment = make_appointment(status=AppointmentStatus.COMPLETED)

    response = client.post(f"{API}/appointments/{appointment.id}/cancel", json={"reason": "Changed mind"})

    assert response.status_code == 409
    assert response.json()["details"]["current_state"] == "completed"


@pytest.mark.api
def test_available_slots(client, make_appointment, doctor):
    make_appointment(start=time(9, 0), duration=30)

    response = client.get(
        f"{API}/appointments/available-slots",
        params={"doctor_id": doctor.id, "date": "2025-03-11", "duration_minutes": 30},
    )

    assert response.status_code == 200
    slots = response.json()["slots"]
    assert slots[0] == {"start": "09:00", "end": "09:30", "available": False}
    assert {"start": "09:30", "end": "10:00", "available": True} in slots


# ============================================================================
# Medications
# ============================================================================


@pytest.mark.api
def test_create_medication(client, patient):
    response = client.post(
        f"{API}/medications",
        json={
            "patient_id": patient.id,
            "name": "Enalapril",
            "dosage": "10mg",
            "times": ["20:00", "08:00"],
            "start_date": "2025-03-01",
            "end_date": "2025-04-01",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["times"] == ["08:00", "20:00"]
    # clock is 08:00, so 08:00 has already come
    assert body["next_dose_time"] == "20:00"


@pytest.mark.api
def test_create_medication_with_bad_time_returns_400(client, patient):
    response = client.post(
        f"{API}/medications",
        json={
            "patient_id": patient.id,
            "name": "Enalapril",
            "dosage": "10mg",
            "times": ["25:00"],
            "start_date": "2025-03-01",
            "end_date": "2025-04-01",
        },
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.api
def test_link_channel(client, patient):
    response = client.put(f"{API}/users/{patient.id}/notification-channel", json={"channel_id": "9001"})

    assert response.status_code == 200
    assert response.json()["notification_channel_id"] == "9001"


@pytest.mark.api
def test_adherence_without_records(client, patient):
    response = client.get(f"{API}/patients/{patient.id}/adherence", params={"days": 7})

    assert response.status_code == 200
    body = response.json()
    assert body["adherence_rate"] == 0
    assert body["total_doses"] == 0
    assert body["days"] == 7


# ============================================================================
# Scheduler admin
# ============================================================================


@pytest.mark.api
def test_scheduler_routes_unavailable_without_scheduler(client):
    assert client.post(f"{API}/scheduler/run/reminder_pass").status_code == 503
    assert client.get(f"{API}/scheduler/jobs").status_code == 503


@pytest.mark.api
def test_scheduler_run_task(app, client):
    context = MagicMock()
    context.periodic_tasks.run_task = AsyncMock(
        return_value={"task": "health_ping", "skipped": False, "result": {"jobs": 7}}
    )
    app.state.scheduler_context = context

    response = client.post(f"{API}/scheduler/run/health_ping")

    assert response.status_code == 200
    assert response.json()["result"] == {"jobs": 7}
