"""
Deal domain layer.

Responsibilities:
- Typed Deal / Establishment models shared by every caller.
- Happy-hour activity resolution (valid days, time windows, venue status).
- Alcohol category rules, geo helpers and the read-only data store.
"""
