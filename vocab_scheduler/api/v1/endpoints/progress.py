"""Endpoints for learner progress."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from vocab_scheduler.api.deps import get_corpus, get_corpus_index, get_learning_engine, require_item
from vocab_scheduler.core.srs.intervals import is_due
from vocab_scheduler.core.srs.mastery import get_difficulty_label
from vocab_scheduler.schemas import (
    AnswerRequest,
    AnswerResponse,
    HardFlagResponse,
    ItemProgressDetail,
    ItemStatistics,
    ProgressSummary,
    ResultRequest,
    VocabularyItem,
)
from vocab_scheduler.services.learning_engine import LearningEngine


router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/results", response_model=ItemStatistics)
async def submit_result(
    *,
    payload: ResultRequest,
    index: dict[str, VocabularyItem] = Depends(get_corpus_index),
    engine: LearningEngine = Depends(get_learning_engine),
) -> ItemStatistics:
    """Record a graded answer and return the item's new statistics."""

    require_item(payload.item_id, index)
    return await engine.apply_result(payload.item_id, payload.outcome)


@router.post("/answers", response_model=AnswerResponse)
async def submit_answer(
    *,
    payload: AnswerRequest,
    index: dict[str, VocabularyItem] = Depends(get_corpus_index),
    engine: LearningEngine = Depends(get_learning_engine),
) -> AnswerResponse:
    """Grade a typed answer against the item and record the outcome."""

    item = require_item(payload.item_id, index)
    match, stats = await engine.submit_answer(item, payload.answer)
    return AnswerResponse(
        item_id=item.id,
        match=match.outcome.value,
        similarity=round(match.similarity, 4),
        outcome=match.outcome_for_result(),
        statistics=stats,
    )


@router.post("/{item_id}/hard-flag", response_model=HardFlagResponse)
async def toggle_hard_flag(
    item_id: str,
    index: dict[str, VocabularyItem] = Depends(get_corpus_index),
    engine: LearningEngine = Depends(get_learning_engine),
) -> HardFlagResponse:
    require_item(item_id, index)
    hard_flag = await engine.toggle_hard_flag(item_id)
    return HardFlagResponse(item_id=item_id, hard_flag=hard_flag)


@router.get("/summary", response_model=ProgressSummary)
async def get_summary(
    corpus: list[VocabularyItem] = Depends(get_corpus),
    engine: LearningEngine = Depends(get_learning_engine),
) -> ProgressSummary:
    """Return corpus-wide progress for dashboards."""

    return await engine.summarize(corpus)


@router.get("/{item_id}", response_model=ItemProgressDetail)
async def get_progress_detail(
    item_id: str,
    index: dict[str, VocabularyItem] = Depends(get_corpus_index),
    engine: LearningEngine = Depends(get_learning_engine),
) -> ItemProgressDetail:
    """Return the scheduling state for one item."""

    require_item(item_id, index)
    stats = await engine.get_statistics(item_id)
    seen = stats is not None and stats.times_seen > 0
    level = stats.mastery_level if stats else 0
    return ItemProgressDetail(
        item_id=item_id,
        is_new=not seen,
        is_due=seen and is_due(stats.next_due_date, engine.clock()),
        difficulty_label=get_difficulty_label(level),
        answer_type=await engine.get_answer_type(item_id),
        statistics=stats,
    )


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def reset_all_progress(engine: LearningEngine = Depends(get_learning_engine)) -> Response:
    """Irreversibly clear every statistic, the session history and the streak."""

    await engine.reset_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def reset_item_progress(
    item_id: str,
    index: dict[str, VocabularyItem] = Depends(get_corpus_index),
    engine: LearningEngine = Depends(get_learning_engine),
) -> Response:
    require_item(item_id, index)
    await engine.reset_one(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
