"""
Backend package for the realms API.

This package provides a FastAPI application exposing realm metadata and
realm activity, with database and auth abstractions so the same code runs
against Firebase/Postgres in production and in-memory backends in tests.
"""
