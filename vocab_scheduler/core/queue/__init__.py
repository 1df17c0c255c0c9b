"""Daily queue classification, assembly and ordering."""

from vocab_scheduler.core.queue.assembler import build_daily_queue, get_daily_session_queue
from vocab_scheduler.core.queue.classifier import ClassifiedBuckets, classify
from vocab_scheduler.core.queue.interleave import interleave_by_category

__all__ = [
    "ClassifiedBuckets",
    "build_daily_queue",
    "classify",
    "get_daily_session_queue",
    "interleave_by_category",
]
