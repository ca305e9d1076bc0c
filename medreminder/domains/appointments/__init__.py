"""
Appointments Domain

Doctor appointments, their status lifecycle and double-booking prevention.
"""
