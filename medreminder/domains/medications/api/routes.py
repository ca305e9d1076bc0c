"""
Medications API Routes

Medication CRUD drives the per-medication reminder triggers; channel
link/unlink schedules or cancels every trigger of the patient.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from medreminder.api.dependencies import Container
from medreminder.core.clock import IClock
from medreminder.domains.medications.api.dependencies import (
    get_adherence_use_case,
    get_create_medication_use_case,
    get_delete_medication_use_case,
    get_link_channel_use_case,
    get_unlink_channel_use_case,
    get_update_medication_use_case,
    get_weekly_adherence_use_case,
)
from medreminder.domains.medications.api.schemas import (
    AdherenceResponse,
    MedicationCreate,
    MedicationResponse,
    MedicationUpdate,
    NotificationChannelLink,
    UserResponse,
    WeekdayAdherenceResponse,
    WeeklyAdherenceResponse,
)
from medreminder.domains.medications.application.use_cases import (
    CreateMedicationRequest,
    CreateMedicationUseCase,
    DeleteMedicationUseCase,
    GetAdherenceUseCase,
    GetWeeklyAdherencePatternUseCase,
    LinkNotificationChannelUseCase,
    UnlinkNotificationChannelUseCase,
    UpdateMedicationRequest,
    UpdateMedicationUseCase,
)
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.shared.domain.entities.user import User

medications_router = APIRouter(prefix="/medications", tags=["Medications"])
users_router = APIRouter(prefix="/users", tags=["Users"])
adherence_router = APIRouter(prefix="/patients", tags=["Adherence"])

# Type aliases for use case dependencies
CreateMedicationUseCaseDep = Annotated[CreateMedicationUseCase, Depends(get_create_medication_use_case)]
UpdateMedicationUseCaseDep = Annotated[UpdateMedicationUseCase, Depends(get_update_medication_use_case)]
DeleteMedicationUseCaseDep = Annotated[DeleteMedicationUseCase, Depends(get_delete_medication_use_case)]
LinkChannelUseCaseDep = Annotated[LinkNotificationChannelUseCase, Depends(get_link_channel_use_case)]
UnlinkChannelUseCaseDep = Annotated[UnlinkNotificationChannelUseCase, Depends(get_unlink_channel_use_case)]
GetAdherenceUseCaseDep = Annotated[GetAdherenceUseCase, Depends(get_adherence_use_case)]
GetWeeklyAdherenceUseCaseDep = Annotated[GetWeeklyAdherencePatternUseCase, Depends(get_weekly_adherence_use_case)]


def _medication_to_response(medication: Medication, clock: IClock) -> MedicationResponse:
    now = clock.now()
    return MedicationResponse(
        id=medication.id or 0,
        patient_id=medication.patient_id,
        doctor_id=medication.doctor_id,
        name=medication.name,
        dosage=medication.dosage,
        instructions=medication.instructions,
        times=list(medication.times),
        start_date=medication.start_date,
        end_date=medication.end_date,
        is_active=medication.is_active,
        last_reminded_at=medication.last_reminded_at,
        next_dose_time=medication.next_dose_time(now),
        days_remaining=medication.days_remaining(now.date()),
    )


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id or 0,
        name=user.name,
        email=user.email,
        role=user.role.value,
        notification_channel_id=user.notification_channel_id,
        is_active=user.is_active,
    )


# ============================================================================
# MEDICATIONS
# ============================================================================


@medications_router.post("", response_model=MedicationResponse, status_code=status.HTTP_201_CREATED)
async def create_medication(
    request: MedicationCreate,
    use_case: CreateMedicationUseCaseDep,
    container: Container,
):
    """Create a medication and register its daily reminders."""
    medication = await use_case.execute(
        CreateMedicationRequest(
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            name=request.name,
            dosage=request.dosage,
            instructions=request.instructions,
            times=request.times,
            start_date=request.start_date,
            end_date=request.end_date,
        )
    )
    return _medication_to_response(medication, container.get_clock())


@medications_router.patch("/{medication_id}", response_model=MedicationResponse)
async def update_medication(
    medication_id: int,
    request: MedicationUpdate,
    use_case: UpdateMedicationUseCaseDep,
    container: Container,
):
    """Update a medication and replace its daily reminders."""
    medication = await use_case.execute(
        medication_id,
        UpdateMedicationRequest(**request.model_dump(exclude_unset=True)),
    )
    return _medication_to_response(medication, container.get_clock())


@medications_router.delete("/{medication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medication(medication_id: int, use_case: DeleteMedicationUseCaseDep):
    """Delete a medication and cancel its reminders."""
    await use_case.execute(medication_id)


# ============================================================================
# NOTIFICATION CHANNEL
# ============================================================================


@users_router.put("/{user_id}/notification-channel", response_model=UserResponse)
async def link_notification_channel(
    user_id: int,
    request: NotificationChannelLink,
    use_case: LinkChannelUseCaseDep,
):
    """Link a notification channel and schedule the user's active medications."""
    user = await use_case.execute(user_id, request.channel_id)
    return _user_to_response(user)


@users_router.delete("/{user_id}/notification-channel", response_model=UserResponse)
async def unlink_notification_channel(user_id: int, use_case: UnlinkChannelUseCaseDep):
    """Remove the notification channel and cancel every reminder of the user."""
    user = await use_case.execute(user_id)
    return _user_to_response(user)


# ============================================================================
# ADHERENCE
# ============================================================================


@adherence_router.get("/{patient_id}/adherence", response_model=AdherenceResponse)
async def get_adherence(
    patient_id: int,
    use_case: GetAdherenceUseCaseDep,
    medication_id: int | None = Query(None, description="Restrict to one medication"),
    days: int = Query(30, ge=1, le=366, description="Trailing window in days"),
):
    """Adherence rate over the last `days` days."""
    stats = await use_case.execute(patient_id, medication_id=medication_id, days=days)
    return AdherenceResponse(patient_id=patient_id, medication_id=medication_id, days=days, **stats.to_dict())


@adherence_router.get("/{patient_id}/adherence/weekly", response_model=WeeklyAdherenceResponse)
async def get_weekly_adherence(
    patient_id: int,
    use_case: GetWeeklyAdherenceUseCaseDep,
    medication_id: int | None = Query(None, description="Restrict to one medication"),
    weeks: int = Query(4, ge=1, le=52, description="Trailing window in weeks"),
):
    """Adherence per weekday, Sunday first."""
    pattern = await use_case.execute(patient_id, medication_id=medication_id, weeks=weeks)
    return WeeklyAdherenceResponse(
        patient_id=patient_id,
        medication_id=medication_id,
        weeks=weeks,
        days=[WeekdayAdherenceResponse(**day.to_dict()) for day in pattern],
    )


__all__ = ["medications_router", "users_router", "adherence_router"]
