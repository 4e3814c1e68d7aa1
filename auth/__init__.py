"""
auth — User authentication module.

Provides:
  • Session token creation & verification (HS256 JWT)
  • Password hashing (bcrypt, legacy SHA-256 digests still verify)
  • Register / Login / Profile API routes
  • ``get_current_user`` FastAPI dependency
"""
