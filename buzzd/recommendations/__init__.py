"""
Deal recommendation engine.

Responsibilities:
- Accept a user position and optional category filter.
- Tag every deal with its happy-hour status and distance.
- Score and rank deals by distance, price, activity and stored preferences.
- Keep per-user preferences behind a pluggable storage backend.
"""
