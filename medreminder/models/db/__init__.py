from medreminder.models.db.base import Base, TimestampMixin

__all__ = ["Base", "TimestampMixin"]
