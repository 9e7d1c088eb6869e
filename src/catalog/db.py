"""
Database connection helpers.
Single source of truth for PostgreSQL connection-string resolution.
"""

from __future__ import annotations

import os

import psycopg2


def get_conn_str() -> str:
    """Return PostgreSQL connection string.

    Priority:
    1. EXERCISES_CONNECTION_STRING
    2. POSTGRES_CONNECTION_STRING
    3. DATABASE_URL (Heroku standard)

    Normalises postgres:// to postgresql:// for psycopg2.
    """
    url = (
        os.getenv("EXERCISES_CONNECTION_STRING")
        or os.getenv("POSTGRES_CONNECTION_STRING")
        or os.getenv("DATABASE_URL")
        or ""
    ).strip()
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def get_connection(conn_str: str | None = None):
    """Return a new psycopg2 connection."""
    cs = conn_str or get_conn_str()
    if not cs:
        raise RuntimeError(
            "EXERCISES_CONNECTION_STRING (or POSTGRES_CONNECTION_STRING / DATABASE_URL) is not configured"
        )
    return psycopg2.connect(cs)
