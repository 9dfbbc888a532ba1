"""
Authentication core:
- password hashing (argon2)
- signed access tokens (PyJWT, HS256 only)
- opaque refresh tokens backed by the persistence collaborator
- Authorization header parsing and authorization guards
"""
