"""
Medications Domain

Medication schedules, reminder dispatch, missed-dose detection and
adherence statistics.
"""
