"""Database helpers for the SQL-backed key-value store."""
