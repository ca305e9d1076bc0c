"""
Shared Domain

User accounts (patients, doctors, administrators) and their notification
channel, referenced by the medications and appointments domains.
"""
