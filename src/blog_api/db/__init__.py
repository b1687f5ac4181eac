"""
blog_api.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on the repository protocol, not on this package's concrete classes,
# so the backend can be swapped without touching business rules.
