"""Bounded contexts of the MedReminder service."""
