"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from loguru import logger


class VocabSchedulerException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class StorageError(VocabSchedulerException):
    """Persisted key-value store could not be read or written."""
    pass


class CorpusError(VocabSchedulerException):
    """Word list could not be loaded or converted."""
    pass


class ValidationError(VocabSchedulerException):
    """Data validation errors."""
    pass


class UnknownItemError(VocabSchedulerException):
    """Requested vocabulary item is not part of the corpus."""

    def __init__(self, item_id: str):
        super().__init__(f"Vocabulary item {item_id!r} not found", {"item_id": item_id})
        self.item_id = item_id


def handle_storage_error(error: StorageError) -> HTTPException:
    """Handle storage errors and return appropriate HTTP response."""
    logger.error(f"Storage error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Learning progress storage is unavailable. Please try again later."
    )


def handle_corpus_error(error: CorpusError) -> HTTPException:
    """Handle corpus loading errors."""
    logger.error(f"Corpus error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Vocabulary list could not be loaded."
    )


def handle_validation_error(error: ValidationError) -> HTTPException:
    """Handle validation errors."""
    logger.warning(f"Validation error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": error.message,
            "details": error.details
        }
    )


def handle_unknown_item_error(error: UnknownItemError) -> HTTPException:
    """Handle lookups of items missing from the corpus."""
    logger.warning(f"Unknown item: {error.item_id}")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message
    )
