"""Public scheduling operations used by the learning UI."""
from __future__ import annotations

import datetime as dt
import random
from collections.abc import Callable, Sequence

from loguru import logger

from vocab_scheduler.config import Settings, settings as default_settings
from vocab_scheduler.core.answers import MatchResult, evaluate_match
from vocab_scheduler.core.progress import summarize
from vocab_scheduler.core.queue import build_daily_queue, get_daily_session_queue
from vocab_scheduler.core.srs import mastery
from vocab_scheduler.schemas.progress import AnswerType, ItemStatistics, LearningOutcome, ProgressSummary
from vocab_scheduler.schemas.queue import DailyQueue
from vocab_scheduler.schemas.session import DailySession, GameScore, GameType, LearningSettings
from vocab_scheduler.schemas.vocabulary import VocabularyItem
from vocab_scheduler.services.mastery_store import MasteryStore
from vocab_scheduler.utils.exceptions import ValidationError


class LearningEngine:
    """High level helper wiring the scheduling core to persisted state."""

    def __init__(
        self,
        store: MasteryStore,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], dt.date] | None = None,
        config: Settings | None = None,
    ) -> None:
        self.store = store
        self.rng = rng or random.Random()
        self.clock = clock or dt.date.today
        self.config = config or default_settings

    def _today(self, today: dt.date | None) -> dt.date:
        return today or self.clock()

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------
    async def apply_result(
        self,
        item_id: str,
        outcome: LearningOutcome,
        today: dt.date | None = None,
    ) -> ItemStatistics:
        """Record one answer and return the persisted statistics."""

        today = self._today(today)
        updated = await self.store.update(
            item_id,
            lambda stats: mastery.apply_result(stats, outcome, today, item_id=item_id),
        )
        logger.info(
            "Applied learning result",
            item_id=item_id,
            outcome=outcome.value,
            level=updated.mastery_level,
            next_due=str(updated.next_due_date),
        )
        return updated

    def grade_answer(self, item: VocabularyItem, answer: str) -> MatchResult:
        """Compare a typed or spoken answer with the item's source text."""

        return evaluate_match(answer, item.source_text, close_threshold=self.config.CLOSE_MATCH_THRESHOLD)

    async def submit_answer(
        self,
        item: VocabularyItem,
        answer: str,
        today: dt.date | None = None,
    ) -> tuple[MatchResult, ItemStatistics]:
        """Grade ``answer`` and record the resulting outcome."""

        match = self.grade_answer(item, answer)
        stats = await self.apply_result(item.id, match.outcome_for_result(), today)
        return match, stats

    async def toggle_hard_flag(self, item_id: str) -> bool:
        """Flip the hard flag for ``item_id`` and return the new state."""

        updated = await self.store.update(item_id, lambda stats: mastery.toggle_hard_flag(stats, item_id))
        logger.info("Toggled hard flag", item_id=item_id, hard_flag=updated.hard_flag)
        return updated.hard_flag

    async def get_statistics(self, item_id: str) -> ItemStatistics | None:
        return await self.store.get(item_id)

    async def get_answer_type(self, item_id: str) -> AnswerType:
        """Pick the answer format for the item from its level and the learner's preference."""

        stats = await self.store.get(item_id)
        level = stats.mastery_level if stats else 0
        learning_settings = await self.get_settings()
        return mastery.get_answer_type(level, learning_settings.prefer_typed, self.rng)

    # ------------------------------------------------------------------
    # Queues
    # ------------------------------------------------------------------
    async def _resolve_goal(self, daily_goal: int | None) -> int:
        if daily_goal is None:
            return (await self.get_settings()).daily_goal
        if daily_goal < 1:
            raise ValidationError("Daily goal must be at least 1", {"daily_goal": daily_goal})
        return daily_goal

    async def build_daily_queue(
        self,
        all_items: Sequence[VocabularyItem],
        daily_goal: int | None = None,
        today: dt.date | None = None,
    ) -> DailyQueue:
        """Return today's bucketed queue; the stored daily goal applies when none is given."""

        today = self._today(today)
        goal = await self._resolve_goal(daily_goal)
        all_stats = await self.store.load_all()
        queue = build_daily_queue(
            all_items,
            all_stats,
            goal,
            today,
            rng=self.rng,
            recent_wrong_days=self.config.RECENT_WRONG_WINDOW_DAYS,
            minutes_per_item=self.config.MINUTES_PER_ITEM,
        )
        logger.debug(
            "Built daily queue",
            daily_goal=goal,
            total=queue.total,
            due=len(queue.due),
            new=len(queue.new),
        )
        return queue

    async def get_daily_session_queue(
        self,
        all_items: Sequence[VocabularyItem],
        daily_goal: int | None = None,
        today: dt.date | None = None,
    ) -> list[VocabularyItem]:
        """Return the daily queue as one list, priority first, interleaved by category."""

        today = self._today(today)
        goal = await self._resolve_goal(daily_goal)
        all_stats = await self.store.load_all()
        return get_daily_session_queue(
            all_items,
            all_stats,
            goal,
            today,
            rng=self.rng,
            recent_wrong_days=self.config.RECENT_WRONG_WINDOW_DAYS,
            minutes_per_item=self.config.MINUTES_PER_ITEM,
        )

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------
    async def summarize(
        self,
        all_items: Sequence[VocabularyItem],
        today: dt.date | None = None,
    ) -> ProgressSummary:
        today = self._today(today)
        all_stats = await self.store.load_all()
        streak = await self.store.get_streak()
        return summarize(all_items, all_stats, streak, today)

    async def reset_all(self) -> None:
        """Irreversibly clear statistics, session history and streak."""

        await self.store.clear()
        logger.warning("Reset all learning progress")

    async def reset_one(self, item_id: str) -> bool:
        removed = await self.store.remove(item_id)
        logger.info("Reset item progress", item_id=item_id, removed=removed)
        return removed

    # ------------------------------------------------------------------
    # Settings, sessions and games
    # ------------------------------------------------------------------
    async def get_settings(self) -> LearningSettings:
        return await self.store.get_settings(default_daily_goal=self.config.DEFAULT_DAILY_GOAL)

    async def save_settings(self, learning_settings: LearningSettings) -> LearningSettings:
        await self.store.save_settings(learning_settings)
        return learning_settings

    async def update_streak(self, today: dt.date | None = None) -> int:
        return await self.store.update_streak(self._today(today))

    async def record_session(
        self,
        *,
        words_studied: int = 0,
        correct_answers: int = 0,
        wrong_answers: int = 0,
        time_spent_minutes: int = 0,
        completed_goal: bool = False,
        today: dt.date | None = None,
    ) -> DailySession:
        """Add a finished session to today's totals."""

        session = await self.store.record_session(
            self._today(today),
            {
                "words_studied": words_studied,
                "correct_answers": correct_answers,
                "wrong_answers": wrong_answers,
                "time_spent_minutes": time_spent_minutes,
                "completed_goal": completed_goal,
            },
            history_days=self.config.SESSION_HISTORY_DAYS,
        )
        logger.info("Recorded learning session", date=str(session.date), words=session.words_studied)
        return session

    async def get_sessions(self) -> list[DailySession]:
        return await self.store.get_sessions()

    async def save_game_score(self, score: GameScore) -> list[GameScore]:
        return await self.store.save_game_score(score, keep=self.config.GAME_SCORES_KEPT)

    async def get_game_scores(self) -> dict[GameType, list[GameScore]]:
        return await self.store.get_game_scores()

    async def get_best_score(self, game: GameType) -> int:
        scores = (await self.store.get_game_scores())[game]
        if not scores:
            return 0
        return max(entry.score for entry in scores)
