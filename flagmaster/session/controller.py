"""Session controller.

Hands the caller one question at a time and absorbs the answers:

    ADVANCING -> AWAITING_ANSWER -> SCORING -> ADVANCING -> ... -> COMPLETE

Missed items come back through the retry queue before the main queue is
consulted. In SRS modes each answer to a main-queue question updates the
item's review card and is written to the card store straight away, so ending
a session early never loses an answer that was already scored. Retry
exposures are session practice and leave the card alone.

Rendering, timers and XP live outside; they observe the session through
outcome listeners.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Callable

from flagmaster.config import Config
from flagmaster.constants import SCORE_CORRECT, SCORE_PENALTY, SCORE_STREAK_BONUS
from flagmaster.db.models import AnswerOutcome, Item
from flagmaster.review.scheduler import ReviewScheduler
from flagmaster.review.sm2 import quality_from_performance
from flagmaster.session.answers import is_correct_answer
from flagmaster.session.distractors import build_options
from flagmaster.session.queue_builder import QueueBuilder, SessionMode
from flagmaster.session.retry import RetryQueue

logger = logging.getLogger(__name__)

OutcomeListener = Callable[[AnswerOutcome], None]


class SessionPhase(Enum):
    AWAITING_ANSWER = "awaiting_answer"
    SCORING = "scoring"
    ADVANCING = "advancing"
    COMPLETE = "complete"


class SessionStateError(RuntimeError):
    """An operation was attempted in the wrong session phase."""


@dataclass
class Question:
    """One question put to the learner."""

    tick: int
    item: Item
    options: list[Item] = field(default_factory=list)  # Empty in free-text mode
    from_retry: bool = False


@dataclass
class SessionState:
    """Ephemeral state of a running session."""

    mode: SessionMode
    category: str | None = None
    queue: list[Item] = field(default_factory=list)
    phase: SessionPhase = SessionPhase.ADVANCING
    current: Question | None = None
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    correct_count: int = 0
    wrong_count: int = 0
    tick: int = 0
    exhausted: bool = False  # Queue and retries ran out without the session being ended
    time_remaining: int | None = None  # Seconds, timed mode only


class SessionController:
    """Runs one quiz session over the catalog."""

    def __init__(
        self,
        catalog: list[Item],
        scheduler: ReviewScheduler,
        mode: "str | SessionMode",
        category: str | None = None,
        builder: QueueBuilder | None = None,
        retry: RetryQueue | None = None,
        rng: random.Random | None = None,
        distractor_count: int = 3,
        time_limit: int | None = None,
        listeners: list[OutcomeListener] | None = None,
        today: date | datetime | None = None,
    ):
        self.catalog = list(catalog)
        self.scheduler = scheduler
        self.rng = rng if rng is not None else random.Random()
        self.builder = builder if builder is not None else QueueBuilder(self.catalog, scheduler, rng=self.rng)
        self.retry = retry if retry is not None else RetryQueue()
        self.distractor_count = distractor_count
        self.listeners: list[OutcomeListener] = list(listeners or [])
        self.today = today

        mode = SessionMode.parse(mode)
        self.state = SessionState(
            mode=mode,
            category=category,
            queue=self.builder.build(mode, category, today),
            time_remaining=time_limit if mode is SessionMode.TIMED else None,
        )
        logger.info(f"Started {mode.value} session with {len(self.state.queue)} queued items")

    @classmethod
    def from_config(
        cls,
        config: Config,
        catalog: list[Item],
        scheduler: ReviewScheduler,
        mode: "str | SessionMode",
        category: str | None = None,
        listeners: list[OutcomeListener] | None = None,
        rng: random.Random | None = None,
    ) -> "SessionController":
        """Create a session using the configured queue sizes and retry gaps."""
        if rng is None:
            rng = random.Random(config.random_seed)
        builder = QueueBuilder(
            catalog,
            scheduler,
            rng=rng,
            new_per_session=config.new_per_session,
            category_new_per_session=config.category_new_per_session,
            max_queue_size=config.max_queue_size,
        )
        return cls(
            catalog,
            scheduler,
            mode,
            category=category,
            builder=builder,
            retry=RetryQueue(config.retry_gaps),
            rng=rng,
            distractor_count=config.distractor_count,
            time_limit=config.timed_seconds,
            listeners=listeners,
        )

    @property
    def mode(self) -> SessionMode:
        return self.state.mode

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def is_complete(self) -> bool:
        return self.state.phase is SessionPhase.COMPLETE

    def add_listener(self, listener: OutcomeListener) -> None:
        """Register a callback for answer outcomes."""
        self.listeners.append(listener)

    def next_question(self) -> Question | None:
        """Advance to the next question, or complete the session.

        Returns:
            The next Question, or None once the session is complete.
        """
        state = self.state
        if state.phase is SessionPhase.COMPLETE:
            return None
        if state.phase is not SessionPhase.ADVANCING:
            raise SessionStateError("Answer the current question before advancing")

        state.tick += 1
        item = self.retry.pop_due(state.tick)
        from_retry = item is not None

        if item is None:
            if not state.queue and state.mode.loops:
                state.queue = self.builder.build(state.mode, state.category, self.today)
            if state.queue:
                item = state.queue.pop(0)
            else:
                # Main queue is done; finish pending reinforcement first
                item = self.retry.force_pop(state.tick)
                from_retry = item is not None

        if item is None:
            state.exhausted = True
            self._complete()
            return None

        options = []
        if state.mode.multiple_choice:
            options = build_options(item, self.catalog, self.distractor_count, self.rng)

        state.current = Question(tick=state.tick, item=item, options=options, from_retry=from_retry)
        state.phase = SessionPhase.AWAITING_ANSWER
        return state.current

    def submit_answer(self, answer: str, response_time_ms: int | None = None) -> AnswerOutcome:
        """Score an answer to the current question.

        Args:
            answer: The chosen option's name or the typed answer
            response_time_ms: Optional response time, used to grade recall quality

        Raises:
            SessionStateError: If no question is awaiting an answer.
        """
        state = self.state
        if state.phase is not SessionPhase.AWAITING_ANSWER or state.current is None:
            raise SessionStateError("No question is awaiting an answer")

        state.phase = SessionPhase.SCORING
        question = state.current
        item = question.item
        correct = is_correct_answer(answer, item.name)

        if correct:
            state.streak += 1
            state.best_streak = max(state.best_streak, state.streak)
            state.correct_count += 1
            state.score += SCORE_CORRECT + (SCORE_STREAK_BONUS if state.streak > 1 else 0)
        else:
            state.streak = 0
            state.wrong_count += 1
            state.score += SCORE_PENALTY

        # Retry exposures are session practice and leave the card alone
        if state.mode.uses_srs and not question.from_retry:
            if correct:
                quality = quality_from_performance(True, response_time_ms)
                card = self.scheduler.record_correct(item.code, quality, today=self.today)
            else:
                card = self.scheduler.record_incorrect(item.code, today=self.today)
            self.scheduler.save([item.code])
        else:
            card = self.scheduler.peek(item.code)

        # A miss on a retry exposure keeps the running cycle going
        if not correct and not question.from_retry:
            self.retry.schedule(item, question.tick)

        outcome = AnswerOutcome(
            item_code=item.code,
            was_correct=correct,
            new_ease_factor=card.ease_factor,
            new_interval=card.interval_days,
            correct_answer=item.name,
            tick=question.tick,
            from_retry=question.from_retry,
            score=state.score,
            streak=state.streak,
        )
        state.phase = SessionPhase.ADVANCING
        self._notify(outcome)
        return outcome

    def tick_timer(self, elapsed_seconds: int = 1) -> int | None:
        """Count down the timed-mode clock; expires the session at zero.

        Returns:
            Seconds remaining, or None outside timed mode.
        """
        state = self.state
        if state.time_remaining is None or state.phase is SessionPhase.COMPLETE:
            return state.time_remaining
        state.time_remaining = max(0, state.time_remaining - elapsed_seconds)
        if state.time_remaining == 0:
            self.expire()
        return state.time_remaining

    def expire(self) -> None:
        """Time is up: complete the session without a further question."""
        logger.info(f"Session expired at question {self.state.tick}")
        self._complete()

    def end(self) -> None:
        """Abandon the session. Already scored answers stay committed."""
        self.state.queue.clear()
        self._complete()

    def daily_goal_complete(self) -> bool:
        """True once an SRS session has cleared everything due today."""
        if not self.is_complete or not self.state.mode.uses_srs:
            return False
        pool = self.catalog
        if self.state.mode is SessionMode.CATEGORY:
            pool = [item for item in self.catalog if item.category == self.state.category]
        return self.state.exhausted and not self.scheduler.due_items(pool, self.today)

    def _complete(self) -> None:
        self.retry.clear()
        self.state.current = None
        self.state.phase = SessionPhase.COMPLETE

    def _notify(self, outcome: AnswerOutcome) -> None:
        """Fire-and-forget delivery to outcome listeners."""
        for listener in self.listeners:
            try:
                listener(outcome)
            except Exception as exc:
                logger.error(f"Outcome listener failed for {outcome.item_code}: {exc}")
