from medreminder.database.async_db import get_async_db, get_async_db_context, get_session_factory

__all__ = ["get_async_db", "get_async_db_context", "get_session_factory"]
