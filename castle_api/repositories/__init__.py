"""
Persistence adapters.

Services depend on the repository instead of touching SQLAlchemy sessions.
"""
