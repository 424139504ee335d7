"""Authentication and authorization.

Learn: Users sign in with email/password and receive JWT access and
refresh tokens. Protected routes depend on get_current_identity, which
validates the bearer token against the shared signing secret.

- password.py: bcrypt hashing and verification
- jwt.py: token issuing and verification
- dependencies.py: the FastAPI guard
"""
