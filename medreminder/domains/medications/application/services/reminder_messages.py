from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.shared.application.ports.notification_dispatcher import NotificationPayload
from medreminder.domains.shared.domain.entities.user import User


def build_medication_reminder(medication: Medication, scheduled_time: str, patient: User) -> NotificationPayload:
    lines = [
        "Medication Reminder",
        "",
        f"Hello {patient.name}," if patient.name else "Hello,",
        f"It's time to take your {medication.name} ({medication.dosage}).",
        f"Scheduled time: {scheduled_time}",
    ]
    if medication.instructions:
        lines.append(f"Instructions: {medication.instructions}")
    return NotificationPayload(
        kind="medication_reminder",
        text="\n".join(lines),
        data={
            "medication_id": medication.id,
            "medication_name": medication.name,
            "dosage": medication.dosage,
            "scheduled_time": scheduled_time,
        },
    )
