"""
Appointments API Routes

FastAPI router for appointment booking and lifecycle endpoints.
"""

from datetime import date, time
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from medreminder.core.domain import ValidationException
from medreminder.domains.appointments.api.dependencies import (
    get_available_slots_use_case,
    get_book_appointment_use_case,
    get_cancel_appointment_use_case,
    get_complete_appointment_use_case,
    get_confirm_appointment_use_case,
    get_conflict_resolver,
    get_reschedule_appointment_use_case,
)
from medreminder.domains.appointments.api.schemas import (
    AppointmentRequest,
    AppointmentResponse,
    AppointmentUpdate,
    AvailableSlotResponse,
    AvailableSlotsResponse,
    CancelAppointmentRequest,
    CompleteAppointmentRequest,
    ConflictCheckResponse,
)
from medreminder.domains.appointments.application.services.conflict_resolver import AppointmentConflictResolver
from medreminder.domains.appointments.application.use_cases import (
    BookAppointmentRequest,
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    CompleteAppointmentUseCase,
    ConfirmAppointmentUseCase,
    GetAvailableSlotsUseCase,
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
)
from medreminder.domains.appointments.domain.entities.appointment import DEFAULT_DURATION_MINUTES, Appointment
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentType

router = APIRouter(prefix="/appointments", tags=["Appointments"])

# Type aliases for use case dependencies
BookAppointmentUseCaseDep = Annotated[BookAppointmentUseCase, Depends(get_book_appointment_use_case)]
RescheduleAppointmentUseCaseDep = Annotated[RescheduleAppointmentUseCase, Depends(get_reschedule_appointment_use_case)]
ConfirmAppointmentUseCaseDep = Annotated[ConfirmAppointmentUseCase, Depends(get_confirm_appointment_use_case)]
CompleteAppointmentUseCaseDep = Annotated[CompleteAppointmentUseCase, Depends(get_complete_appointment_use_case)]
CancelAppointmentUseCaseDep = Annotated[CancelAppointmentUseCase, Depends(get_cancel_appointment_use_case)]
GetAvailableSlotsUseCaseDep = Annotated[GetAvailableSlotsUseCase, Depends(get_available_slots_use_case)]
ConflictResolverDep = Annotated[AppointmentConflictResolver, Depends(get_conflict_resolver)]


def _appointment_to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id or 0,
        patient_id=appointment.patient_id,
        doctor_id=appointment.doctor_id,
        appointment_date=appointment.appointment_date,  # type: ignore[arg-type]
        start_time=appointment.start_time,  # type: ignore[arg-type]
        end_time=appointment.end_time,  # type: ignore[arg-type]
        duration_minutes=appointment.duration_minutes,
        appointment_type=appointment.appointment_type.value,
        status=appointment.status.value,
        location=appointment.location,
        reason=appointment.reason,
        notes=appointment.notes,
        diagnosis=appointment.diagnosis,
        treatment=appointment.treatment,
        reminder_sent=appointment.reminder_sent,
        cancellation_reason=appointment.cancellation_reason,
        confirmed_at=appointment.confirmed_at,
        completed_at=appointment.completed_at,
        cancelled_at=appointment.cancelled_at,
    )


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(request: AppointmentRequest, use_case: BookAppointmentUseCaseDep):
    """Book a new appointment. Overlapping an active appointment of the doctor is rejected."""
    try:
        appointment_type = AppointmentType(request.appointment_type)
    except ValueError as e:
        raise ValidationException(
            f"Invalid appointment type: {request.appointment_type}", field="appointment_type"
        ) from e

    appointment = await use_case.execute(
        BookAppointmentRequest(
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            appointment_date=request.appointment_date,
            start_time=request.start_time,
            duration_minutes=request.duration_minutes,
            end_time=request.end_time,
            appointment_type=appointment_type,
            location=request.location,
            reason=request.reason,
            notes=request.notes,
        )
    )
    return _appointment_to_response(appointment)


@router.get("/available-slots", response_model=AvailableSlotsResponse)
async def get_available_slots(
    use_case: GetAvailableSlotsUseCaseDep,
    doctor_id: int = Query(..., description="Doctor ID"),
    appointment_date: date = Query(..., alias="date", description="Day to search"),
    duration_minutes: int = Query(DEFAULT_DURATION_MINUTES, ge=15, le=240),
):
    """Candidate slots within clinic hours, flagged by availability."""
    slots = await use_case.execute(doctor_id, appointment_date, duration_minutes)
    return AvailableSlotsResponse(
        doctor_id=doctor_id,
        date=appointment_date,
        duration_minutes=duration_minutes,
        slots=[AvailableSlotResponse(**slot.to_dict()) for slot in slots],
    )


@router.get("/conflicts", response_model=ConflictCheckResponse)
async def check_conflicts(
    resolver: ConflictResolverDep,
    doctor_id: int = Query(..., description="Doctor ID"),
    appointment_date: date = Query(..., alias="date", description="Day of the candidate appointment"),
    start_time: time = Query(..., description="Candidate start time"),
    duration_minutes: int = Query(DEFAULT_DURATION_MINUTES, ge=15, le=240),
    exclude_id: int | None = Query(None, description="Appointment being rescheduled"),
):
    """Check a candidate interval against the doctor's active appointments."""
    conflicts = await resolver.find_conflicts(doctor_id, appointment_date, start_time, duration_minutes, exclude_id)
    return ConflictCheckResponse(
        doctor_id=doctor_id,
        date=appointment_date,
        start_time=start_time,
        duration_minutes=duration_minutes,
        has_conflict=bool(conflicts),
        conflicting_ids=[a.id for a in conflicts if a.id is not None],
    )


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    request: AppointmentUpdate,
    use_case: RescheduleAppointmentUseCaseDep,
):
    """Reschedule or edit an appointment."""
    appointment = await use_case.execute(
        appointment_id,
        RescheduleAppointmentRequest(**request.model_dump(exclude_unset=True)),
    )
    return _appointment_to_response(appointment)


@router.post("/{appointment_id}/confirm", response_model=AppointmentResponse)
async def confirm_appointment(appointment_id: int, use_case: ConfirmAppointmentUseCaseDep):
    appointment = await use_case.execute(appointment_id)
    return _appointment_to_response(appointment)


@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
async def complete_appointment(
    appointment_id: int,
    use_case: CompleteAppointmentUseCaseDep,
    request: CompleteAppointmentRequest | None = None,
):
    request = request or CompleteAppointmentRequest()
    appointment = await use_case.execute(appointment_id, diagnosis=request.diagnosis, treatment=request.treatment)
    return _appointment_to_response(appointment)


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    use_case: CancelAppointmentUseCaseDep,
    request: CancelAppointmentRequest | None = None,
):
    """Cancel an appointment, freeing its interval."""
    request = request or CancelAppointmentRequest()
    appointment = await use_case.execute(appointment_id, reason=request.reason)
    return _appointment_to_response(appointment)


__all__ = ["router"]
