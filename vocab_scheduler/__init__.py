"""Spaced-repetition scheduling for vocabulary learning."""

__version__ = "0.1.0"
