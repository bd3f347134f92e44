"""
Buzzd happy-hour deals service.

Responsibilities:
- Decide which drink deals are running right now, and when they next start.
- Rank deals for a user by distance, price, activity and stored preferences.
- Expose both through a small FastAPI app.
"""
