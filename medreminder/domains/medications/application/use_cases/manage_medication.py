"""
Medication lifecycle use cases.

Every create, update or delete keeps the per-medication daily triggers in
step with the stored record.
"""

import logging
from dataclasses import dataclass
from datetime import date

from medreminder.core.domain import EntityNotFoundException, ValidationException
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.application.ports.reminder_timer_registry import IReminderTimerRegistry
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.shared.application.ports.user_repository import IUserRepository
from medreminder.domains.shared.domain.entities.user import User

logger = logging.getLogger(__name__)


@dataclass
class CreateMedicationRequest:
    patient_id: int
    name: str
    dosage: str
    times: list[str]
    start_date: date
    end_date: date
    doctor_id: int | None = None
    instructions: str = ""


@dataclass
class UpdateMedicationRequest:
    """Fields left as None are not changed."""

    name: str | None = None
    dosage: str | None = None
    instructions: str | None = None
    times: list[str] | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool | None = None


async def _require_user(user_repo: IUserRepository, user_id: int, role: str) -> User:
    user = await user_repo.find_by_id(user_id)
    if user is None or user.role.value != role:
        raise ValidationException(f"{role.capitalize()} {user_id} does not exist", field=f"{role}_id")
    return user


class CreateMedicationUseCase:
    def __init__(
        self,
        medication_repository: IMedicationRepository,
        user_repository: IUserRepository,
        timer_registry: IReminderTimerRegistry | None = None,
    ):
        self.medication_repo = medication_repository
        self.user_repo = user_repository
        self.timer_registry = timer_registry

    async def execute(self, request: CreateMedicationRequest) -> Medication:
        patient = await _require_user(self.user_repo, request.patient_id, "patient")
        if request.doctor_id is not None:
            await _require_user(self.user_repo, request.doctor_id, "doctor")

        medication = Medication.create(
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            name=request.name,
            dosage=request.dosage,
            times=request.times,
            start_date=request.start_date,
            end_date=request.end_date,
            instructions=request.instructions,
        )
        saved = await self.medication_repo.save(medication)

        if self.timer_registry is not None:
            self.timer_registry.schedule_for_medication(saved, patient)

        logger.info(f"Medication {saved.id} ({saved.name}) created for patient {patient.id} at {saved.times}")
        return saved


class UpdateMedicationUseCase:
    def __init__(
        self,
        medication_repository: IMedicationRepository,
        user_repository: IUserRepository,
        timer_registry: IReminderTimerRegistry | None = None,
    ):
        self.medication_repo = medication_repository
        self.user_repo = user_repository
        self.timer_registry = timer_registry

    async def execute(self, medication_id: int, request: UpdateMedicationRequest) -> Medication:
        medication = await self.medication_repo.find_by_id(medication_id)
        if medication is None:
            raise EntityNotFoundException("Medication", medication_id)

        if request.name is not None:
            medication.name = request.name.strip()
        if request.dosage is not None:
            medication.dosage = request.dosage.strip()
        if request.instructions is not None:
            medication.instructions = request.instructions.strip()
        if request.is_active is True:
            medication.activate()
        elif request.is_active is False:
            medication.deactivate()
        medication.update_schedule(
            times=request.times,
            start_date=request.start_date,
            end_date=request.end_date,
        )

        saved = await self.medication_repo.save(medication)

        if self.timer_registry is not None:
            patient = await self.user_repo.find_by_id(saved.patient_id)
            self.timer_registry.schedule_for_medication(saved, patient)

        logger.info(f"Medication {saved.id} updated")
        return saved


class DeleteMedicationUseCase:
    def __init__(
        self,
        medication_repository: IMedicationRepository,
        timer_registry: IReminderTimerRegistry | None = None,
    ):
        self.medication_repo = medication_repository
        self.timer_registry = timer_registry

    async def execute(self, medication_id: int) -> None:
        if not await self.medication_repo.delete(medication_id):
            raise EntityNotFoundException("Medication", medication_id)

        if self.timer_registry is not None:
            self.timer_registry.cancel_for_medication(medication_id)

        logger.info(f"Medication {medication_id} deleted")


class LinkNotificationChannelUseCase:
    """Links a channel to a patient and schedules triggers for their active medications."""

    def __init__(
        self,
        user_repository: IUserRepository,
        medication_repository: IMedicationRepository,
        timer_registry: IReminderTimerRegistry | None = None,
    ):
        self.user_repo = user_repository
        self.medication_repo = medication_repository
        self.timer_registry = timer_registry

    async def execute(self, user_id: int, channel_id: str) -> User:
        if not channel_id or not channel_id.strip():
            raise ValidationException("Channel id is required", field="channel_id")

        user = await self.user_repo.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("User", user_id)

        user.link_channel(channel_id.strip())
        saved = await self.user_repo.save(user)

        if self.timer_registry is not None:
            for medication in await self.medication_repo.find_active_by_patient(user_id):
                self.timer_registry.schedule_for_medication(medication, saved)

        logger.info(f"Notification channel linked for user {user_id}")
        return saved


class UnlinkNotificationChannelUseCase:
    """Removes a patient's channel and cancels every trigger of their medications."""

    def __init__(
        self,
        user_repository: IUserRepository,
        timer_registry: IReminderTimerRegistry | None = None,
    ):
        self.user_repo = user_repository
        self.timer_registry = timer_registry

    async def execute(self, user_id: int) -> User:
        user = await self.user_repo.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("User", user_id)

        user.unlink_channel()
        saved = await self.user_repo.save(user)

        if self.timer_registry is not None:
            cancelled = self.timer_registry.cancel_for_patient(user_id)
            logger.info(f"Cancelled reminder triggers of {cancelled} medications for user {user_id}")

        return saved
