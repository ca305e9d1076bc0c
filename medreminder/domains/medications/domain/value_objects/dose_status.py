from medreminder.core.domain import StatusEnum


class DoseStatus(StatusEnum):
    """Outcome recorded for a scheduled dose."""

    TAKEN = "taken"
    MISSED = "missed"
    SKIPPED = "skipped"
    DELAYED = "delayed"
