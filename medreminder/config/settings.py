from urllib.parse import quote_plus

import pytz
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEDUP_SCOPES = ("dose", "medication")
WEEKDAY_ABBREVIATIONS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and `.env`.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "MedReminder API"
    PROJECT_DESCRIPTION: str = "Medication reminders, adherence tracking and appointment scheduling"
    VERSION: str = "0.1.0"

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("medreminder", description="Database name")
    DB_USER: str = Field("postgres", description="PostgreSQL user")
    DB_PASSWORD: str | None = Field(None, description="PostgreSQL password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(20, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout to acquire a pooled connection")

    # Telegram notification channel
    TELEGRAM_BOT_TOKEN: str | None = Field(None, description="Telegram Bot API token (None = log-only dispatcher)")
    TELEGRAM_API_BASE: str = Field("https://api.telegram.org", description="Telegram Bot API base URL")
    TELEGRAM_REQUEST_TIMEOUT: float = Field(10.0, description="Timeout for Telegram requests in seconds")

    # Scheduler
    SCHEDULER_ENABLED: bool = Field(True, description="Start periodic tasks on application startup")
    SCHEDULER_TIMEZONE: str = Field("UTC", description="Reference timezone for schedules and calendar days")
    TIMER_REGISTRY_ENABLED: bool = Field(True, description="Register per-medication daily triggers")
    TIMER_REGISTRY_TIMEZONE: str = Field("UTC", description="Timezone used by per-medication daily triggers")

    # Medication reminders
    REMINDER_TICK_MINUTES: int = Field(5, description="Reminder pass cadence in minutes")
    REMINDER_TOLERANCE_MINUTES: int = Field(2, description="Matching tolerance around a scheduled time")
    REMINDER_WRAP_MIDNIGHT: bool = Field(False, description="Measure time distance circularly across midnight")
    REMINDER_DEDUP_SCOPE: str = Field(
        "dose",
        description="'dose' = one reminder per (medication, time, day); 'medication' = one per medication per day",
    )
    MISSED_DOSE_OFFSET_MINUTES: int = Field(30, description="Minutes after a scheduled time to flag it missed")
    MISSED_DOSE_WINDOW_MINUTES: int = Field(
        0, description="0 = exact offset match, otherwise [offset, offset + window) is accepted"
    )

    # Appointments
    NO_SHOW_GRACE_HOURS: int = Field(2, description="Hours past the end of an appointment before no-show")
    APPOINTMENT_REMINDER_HOUR: int = Field(9, description="Hour of day for next-day appointment reminders")
    CLINIC_OPENING_TIME: str = Field("09:00", description="Start of bookable hours")
    CLINIC_CLOSING_TIME: str = Field("17:00", description="End of bookable hours")
    CLINIC_BREAK_START: str = Field("12:00", description="Start of the daily break")
    CLINIC_BREAK_END: str = Field("13:00", description="End of the daily break")
    SLOT_STEP_MINUTES: int = Field(15, description="Step between candidate slot start times")

    # Maintenance jobs
    CLEANUP_HOUR: int = Field(0, description="Hour of day for retention cleanup")
    DAILY_STATS_HOUR: int = Field(23, description="Hour of day for the daily statistics log")
    WEEKLY_REPORT_DAY: str = Field("sun", description="Weekday of the adherence report")
    WEEKLY_REPORT_HOUR: int = Field(8, description="Hour of day of the adherence report")
    DOSE_HISTORY_RETENTION_DAYS: int = Field(365, description="Dose records older than this are purged")
    COMPLETED_APPOINTMENT_RETENTION_DAYS: int = Field(
        180, description="Completed appointments older than this are purged"
    )

    # Adherence
    ADHERENCE_LOW_THRESHOLD: int = Field(80, description="Adherence percentage below which a patient is flagged")
    ADHERENCE_REPORT_WINDOW_DAYS: int = Field(7, description="Days covered by the weekly adherence report")
    ADHERENCE_DEFAULT_WINDOW_DAYS: int = Field(30, description="Default window for adherence queries")

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("development", description="Deployment environment")
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN (None disables error tracking)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SCHEDULER_TIMEZONE", "TIMER_REGISTRY_TIMEZONE")
    @classmethod
    def validate_timezone(cls, v):
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("REMINDER_DEDUP_SCOPE")
    @classmethod
    def validate_dedup_scope(cls, v):
        v = v.lower()
        if v not in DEDUP_SCOPES:
            raise ValueError(f"REMINDER_DEDUP_SCOPE must be one of {DEDUP_SCOPES}")
        return v

    @field_validator("WEEKLY_REPORT_DAY")
    @classmethod
    def validate_weekday(cls, v):
        v = v.lower()[:3]
        if v not in WEEKDAY_ABBREVIATIONS:
            raise ValueError(f"WEEKLY_REPORT_DAY must be one of {WEEKDAY_ABBREVIATIONS}")
        return v

    @field_validator("APPOINTMENT_REMINDER_HOUR", "CLEANUP_HOUR", "DAILY_STATS_HOUR", "WEEKLY_REPORT_HOUR")
    @classmethod
    def validate_hour(cls, v):
        if not 0 <= v <= 23:
            raise ValueError("Hour must be between 0 and 23")
        return v

    @field_validator("REMINDER_TICK_MINUTES")
    @classmethod
    def validate_tick(cls, v):
        if v < 1 or 60 % v != 0:
            raise ValueError("REMINDER_TICK_MINUTES must divide 60")
        return v

    @field_validator("REMINDER_TOLERANCE_MINUTES", "MISSED_DOSE_WINDOW_MINUTES")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Value must not be negative")
        return v

    @computed_field
    @property
    def async_database_url(self) -> str:
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            return f"postgresql+asyncpg://{user}:{quote_plus(self.DB_PASSWORD)}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql+asyncpg://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local")


_settings_instance = None


def get_settings() -> Settings:
    """
    Return the process-wide settings, creating them on first use.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
