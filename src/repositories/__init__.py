"""Repository interfaces and implementations.

This package defines abstract repository interfaces for fixtures and
predictions and their SQLite adapters under :mod:`repositories.sqlite`.
Repositories never commit; callers group writes with
:func:`src.db.connection.transaction`.
"""
