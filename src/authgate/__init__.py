"""AuthGate — credential management and bearer-token authentication.

Registers identities, verifies passwords, issues JWT access and refresh
tokens, and guards protected routes behind token validation.
"""

__version__ = "0.1.0"
