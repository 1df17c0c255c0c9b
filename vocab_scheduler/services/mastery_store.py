"""Persistence of learner state on top of a key-value store."""
from __future__ import annotations

import asyncio
import datetime as dt
from collections.abc import Callable
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from vocab_scheduler.schemas.progress import ItemStatistics
from vocab_scheduler.schemas.session import DailySession, GameScore, GameType, LearningSettings
from vocab_scheduler.utils.store import KeyValueStore

WORD_STATS_KEY = "word-stats"
SETTINGS_KEY = "learning-settings"
SESSIONS_KEY = "sessions"
STREAK_KEY = "streak"
LAST_SESSION_KEY = "last-session"
GAME_SCORES_KEY = "game-scores"


class MasteryStore:
    """Owner of every ``ItemStatistics`` record and the learner's history.

    The statistics map is stored as one document. All read-modify-write
    sequences share a single lock so concurrent answers cannot overwrite
    each other. Storage failures propagate to the caller unchanged.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        namespace: str = "vocab",
        default_daily_goal: int = 15,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.default_daily_goal = default_daily_goal
        self._lock = asyncio.Lock()

    def _key(self, name: str) -> str:
        return f"{self.namespace}:{name}"

    # ------------------------------------------------------------------
    # Item statistics
    # ------------------------------------------------------------------
    async def load_all(self) -> dict[str, ItemStatistics]:
        """Return every readable statistics record keyed by item id."""

        raw = await self.store.get(self._key(WORD_STATS_KEY))
        if not raw:
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed statistics document", kind=type(raw).__name__)
            return {}

        stats: dict[str, ItemStatistics] = {}
        for item_id, payload in raw.items():
            if not isinstance(payload, dict):
                logger.warning("Dropping unreadable statistics record", item_id=item_id)
                continue
            try:
                stats[item_id] = ItemStatistics.model_validate({**payload, "item_id": item_id})
            except PydanticValidationError as exc:
                logger.warning(
                    "Dropping unreadable statistics record",
                    item_id=item_id,
                    error=str(exc),
                )
        return stats

    async def save_all(self, stats: dict[str, ItemStatistics]) -> None:
        await self.store.set(
            self._key(WORD_STATS_KEY),
            {item_id: record.model_dump(mode="json") for item_id, record in stats.items()},
        )

    async def get(self, item_id: str) -> ItemStatistics | None:
        return (await self.load_all()).get(item_id)

    async def update(
        self,
        item_id: str,
        mutate: Callable[[ItemStatistics | None], ItemStatistics],
    ) -> ItemStatistics:
        """Apply ``mutate`` to one record and persist the whole map atomically."""

        async with self._lock:
            all_stats = await self.load_all()
            updated = mutate(all_stats.get(item_id))
            all_stats[item_id] = updated
            await self.save_all(all_stats)
        return updated

    async def remove(self, item_id: str) -> bool:
        """Delete one record; returns whether it existed."""

        async with self._lock:
            all_stats = await self.load_all()
            existed = all_stats.pop(item_id, None) is not None
            if existed:
                await self.save_all(all_stats)
        return existed

    async def clear(self) -> None:
        """Erase statistics, session history and streak.

        The keys are written one by one, statistics last. If a write fails the
        statistics are still intact and calling ``clear`` again finishes the
        reset.
        """

        async with self._lock:
            await self.store.set(self._key(LAST_SESSION_KEY), None)
            await self.store.set(self._key(STREAK_KEY), 0)
            await self.store.set(self._key(SESSIONS_KEY), [])
            await self.store.set(self._key(WORD_STATS_KEY), {})

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    async def get_settings(self, *, default_daily_goal: int | None = None) -> LearningSettings:
        """Return stored settings merged over the defaults."""

        raw = await self.store.get(self._key(SETTINGS_KEY))
        defaults = LearningSettings(daily_goal=default_daily_goal or self.default_daily_goal)
        if not isinstance(raw, dict):
            return defaults
        try:
            return LearningSettings.model_validate({**defaults.model_dump(), **raw})
        except PydanticValidationError as exc:
            logger.warning("Stored learning settings are invalid, using defaults", error=str(exc))
            return defaults

    async def save_settings(self, learning_settings: LearningSettings) -> None:
        await self.store.set(self._key(SETTINGS_KEY), learning_settings.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Streak and session history
    # ------------------------------------------------------------------
    async def get_streak(self) -> int:
        streak = await self.store.get(self._key(STREAK_KEY))
        if streak is None:
            return 0
        if isinstance(streak, bool) or not isinstance(streak, int) or streak < 0:
            logger.warning("Ignoring malformed streak", value=repr(streak))
            return 0
        return streak

    async def _update_streak_unlocked(self, today: dt.date) -> int:
        last_session = await self.store.get(self._key(LAST_SESSION_KEY))
        streak = await self.get_streak()
        if last_session == today.isoformat():
            return streak

        yesterday = (today - dt.timedelta(days=1)).isoformat()
        streak = streak + 1 if last_session == yesterday else 1

        await self.store.set(self._key(STREAK_KEY), streak)
        await self.store.set(self._key(LAST_SESSION_KEY), today.isoformat())
        return streak

    async def update_streak(self, today: dt.date) -> int:
        """Count consecutive study days, ending with ``today``."""

        async with self._lock:
            return await self._update_streak_unlocked(today)

    async def get_sessions(self) -> list[DailySession]:
        raw = await self.store.get(self._key(SESSIONS_KEY))
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed session history", kind=type(raw).__name__)
            return []

        sessions: list[DailySession] = []
        for payload in raw:
            try:
                sessions.append(DailySession.model_validate(payload))
            except PydanticValidationError as exc:
                logger.warning("Dropping unreadable session record", error=str(exc))
        return sessions

    async def record_session(
        self,
        today: dt.date,
        counters: dict[str, Any],
        *,
        history_days: int,
    ) -> DailySession:
        """Merge a finished session into today's entry and refresh the streak."""

        async with self._lock:
            sessions = await self.get_sessions()
            incoming = DailySession(date=today, **counters)

            for index, existing in enumerate(sessions):
                if existing.date == today:
                    merged = DailySession(
                        date=today,
                        words_studied=existing.words_studied + incoming.words_studied,
                        correct_answers=existing.correct_answers + incoming.correct_answers,
                        wrong_answers=existing.wrong_answers + incoming.wrong_answers,
                        time_spent_minutes=existing.time_spent_minutes + incoming.time_spent_minutes,
                        completed_goal=incoming.completed_goal or existing.completed_goal,
                    )
                    sessions[index] = merged
                    break
            else:
                merged = incoming
                sessions.append(merged)

            cutoff = today - dt.timedelta(days=history_days)
            recent = [session for session in sessions if session.date >= cutoff]
            await self.store.set(
                self._key(SESSIONS_KEY),
                [session.model_dump(mode="json") for session in recent],
            )
            await self._update_streak_unlocked(today)
        return merged

    # ------------------------------------------------------------------
    # Game scores
    # ------------------------------------------------------------------
    async def get_game_scores(self) -> dict[GameType, list[GameScore]]:
        raw = await self.store.get(self._key(GAME_SCORES_KEY))
        scores: dict[GameType, list[GameScore]] = {game: [] for game in GameType}
        if raw is None:
            return scores
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed game scores", kind=type(raw).__name__)
            return scores

        for game in GameType:
            entries = raw.get(game.value, [])
            if not isinstance(entries, list):
                logger.warning("Ignoring malformed game scores", game=game.value)
                continue
            for payload in entries:
                try:
                    scores[game].append(GameScore.model_validate(payload))
                except PydanticValidationError as exc:
                    logger.warning("Dropping unreadable game score", game=game.value, error=str(exc))
        return scores

    async def save_game_score(self, score: GameScore, *, keep: int) -> list[GameScore]:
        """Store a score, keeping only the best ``keep`` per game."""

        async with self._lock:
            scores = await self.get_game_scores()
            ranked = sorted([*scores[score.game], score], key=lambda entry: entry.score, reverse=True)
            scores[score.game] = ranked[:keep]
            await self.store.set(
                self._key(GAME_SCORES_KEY),
                {
                    game.value: [entry.model_dump(mode="json") for entry in entries]
                    for game, entries in scores.items()
                },
            )
        return scores[score.game]
