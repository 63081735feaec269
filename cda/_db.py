"""PostgreSQL connection — configured through environment variables."""

from __future__ import annotations

import os
import psycopg2
import psycopg2.extras


def get_connection() -> psycopg2.extensions.connection:
    return psycopg2.connect(
        host     = os.getenv("PGHOST",     "localhost"),
        port     = int(os.getenv("PGPORT", "5432")),
        dbname   = os.getenv("PGDATABASE", "coorong_da"),
        user     = os.getenv("PGUSER",     "coorong_da"),
        password = os.getenv("PGPASSWORD", "coorong_da"),
    )
