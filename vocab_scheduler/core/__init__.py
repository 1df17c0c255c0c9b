"""Scheduling core: pure functions over vocabulary items and statistics."""
