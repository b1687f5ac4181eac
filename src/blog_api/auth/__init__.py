"""
blog_api.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- Password hashing.
- The `AuthGateway` (issue/resolve/revoke bearer tokens).
- FastAPI auth dependencies (Principal + admin/ownership checks).
"""

# Package marker.
