"""
Database integration layer for the guru dashboard.

Provides async PostgreSQL connectivity to Supabase and the teacher data
access used by the dashboard and the evaluation flow.
"""

from .connection import (
    DatabaseConfig,
    DatabasePool,
    DatabaseConnectionError,
    get_database_pool,
    close_database_pool,
    parse_database_url,
    create_database_config_from_env,
)

from .queries import (
    TEACHER_COLUMNS,
    TeacherQueries,
    decode_jsonb,
)

__all__ = [
    # Connection
    'DatabaseConfig',
    'DatabasePool',
    'DatabaseConnectionError',
    'get_database_pool',
    'close_database_pool',
    'parse_database_url',
    'create_database_config_from_env',

    # Queries
    'TEACHER_COLUMNS',
    'TeacherQueries',
    'decode_jsonb',
]
