"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: REST adapters for the user
    and country services and the client-side password cipher.

Dependencies:
    Submodules depend on ``requests`` (HTTP) and ``cryptography`` (AES).

Call context:
    Imported by ``weatherdesk.app.controller`` for runtime wiring and by tests
    for transport-level behavior verification.
"""
