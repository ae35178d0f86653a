"""
Guru Dashboard

A teacher-performance dashboard backed by Supabase PostgreSQL, with on-demand
AI evaluations relayed to OpenRouter and cached in each teacher's feedback.
"""

__version__ = "0.1.0"
