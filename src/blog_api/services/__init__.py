"""
blog_api.services

Service-layer package.

Responsibilities:
- Apply entity-level business rules (slug derivation, password hashing,
  token lifecycle) on top of repositories.
- Stay free of HTTP and ORM session details: services see only the
  `Repository` and `AuthGateway` protocols.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are plain Python and easily testable with fake repositories/gateways.
