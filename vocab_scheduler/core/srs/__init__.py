"""Mastery levels and review intervals."""
