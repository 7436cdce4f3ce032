"""
Active Session Manager.

Owns the single in-progress workout session for this device. The session is
stored as a one-document collection in an injected DocumentStore; time comes
from an injected Clock so staleness is deterministic under test.

States:
- Absent: nothing stored (or only a stale session, which reads treat as absent)
- Active: started today and a set was logged within the auto-end window
- Stale: started on another day, or idle for auto_end_minutes or longer

Staleness is never pushed by a timer. It is evaluated on every read through
get_session(), which silently clears a stale session and returns None.
get_session_raw() skips that check so a stale session's summary can be shown
once before it is cleared.
"""
import logging
from datetime import timedelta
from typing import Optional

from application.ports import ChangeCallback, ChangeNotifier, Clock, DocumentStore, Unsubscribe
from backend.core.documents import parse_document
from domain.models import (
    AUTO_END_THRESHOLD_MINUTES,
    INACTIVITY_THRESHOLD_MINUTES,
    ActiveSession,
    Level,
    LevelUp,
    PRAchievement,
    SessionExercise,
    SessionSet,
)

logger = logging.getLogger(__name__)


class ActiveSessionManager:
    """
    Read/modify/write access to the single active session.

    Construct exactly one per application and inject it wherever the session
    is needed. Every mutating call performs one read, applies all of its
    changes in memory, and writes the whole document back once, so observers
    never see a half-applied update.
    """

    def __init__(
        self,
        store: DocumentStore,
        notifier: ChangeNotifier,
        clock: Clock,
        *,
        auto_end_minutes: int = AUTO_END_THRESHOLD_MINUTES,
        inactivity_minutes: int = INACTIVITY_THRESHOLD_MINUTES,
    ):
        """
        Initialize the manager.

        Args:
            store: Collection holding zero or one session document. The store
                publishes on `notifier` when it is written.
            notifier: Change channel observers subscribe to
            clock: Local time source
            auto_end_minutes: Idle minutes after which the session is stale
            inactivity_minutes: Idle minutes after which the user is prompted
        """
        self._store = store
        self._notifier = notifier
        self._clock = clock
        self._auto_end_minutes = auto_end_minutes
        self._inactivity_minutes = inactivity_minutes

    # =========================================================================
    # Reads
    # =========================================================================

    def get_session_raw(self) -> Optional[ActiveSession]:
        """Stored session without a staleness check (may be stale)."""
        items = self._store.get_all()
        if not items:
            return None
        return parse_document(items[0], ActiveSession)

    def get_session(self) -> Optional[ActiveSession]:
        """
        Current session, or None if there is none or it went stale.

        A stale session is removed from the store as a side effect.
        """
        session = self.get_session_raw()
        if session is None:
            return None

        if self.is_stale(session):
            logger.info(
                f"Discarding stale session started {session.start_time.isoformat()}"
            )
            self.clear()
            return None

        return session

    def has_active_session(self) -> bool:
        return self.get_session() is not None

    def is_stale(self, session: ActiveSession) -> bool:
        """Whether a session is stale at the clock's current time."""
        return session.is_stale(self._clock.now(), self._auto_end_minutes)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> ActiveSession:
        """
        Start a session, or return the current one unchanged.

        Idempotent: calling twice without the session going stale returns a
        session with the same start_time.
        """
        existing = self.get_session()
        if existing is not None:
            return existing

        session = self._new_session()
        self._save(session)
        logger.info(f"Workout session started at {session.start_time.isoformat()}")
        return session

    def append_set(
        self,
        exercise_id: str,
        exercise_name: str,
        weight: float,
        reps: int,
        is_warmup: Optional[bool] = None,
        *,
        pr: bool = False,
        level_up: Optional[Level] = None,
    ) -> ActiveSession:
        """
        Add a logged set to the session, starting one if needed.

        Appends to the exercise's set list, moves last_activity_time to now,
        and records the set's PR and level-up events, all in a single write.

        Args:
            pr: The set is a personal record
            level_up: Level the set promoted the lifter to, if any

        Returns:
            The updated session
        """
        session = self.get_session()
        if session is None:
            session = self._new_session()
            logger.info(
                f"Workout session auto-started at {session.start_time.isoformat()}"
            )

        now = self._clock.now()
        exercise = session.exercises.get(exercise_id)
        if exercise is None:
            exercise = SessionExercise(name=exercise_name)
            session.exercises[exercise_id] = exercise

        exercise.sets.append(
            SessionSet(weight=weight, reps=reps, is_warmup=is_warmup, timestamp=now)
        )
        session.last_activity_time = now

        if pr:
            _add_pr(session, exercise_id, exercise_name, weight, reps)
        if level_up is not None:
            _add_level_up(session, exercise_id, exercise_name, level_up)

        self._save(session)
        logger.debug(f"Set logged for {exercise_id}: {weight}kg x {reps}")
        return session

    def record_pr(
        self,
        exercise_id: str,
        exercise_name: str,
        weight: float,
        reps: int,
    ) -> bool:
        """
        Record a personal record hit during the session.

        The same (exercise_id, weight) is only recorded once.

        Returns:
            True if a new PR entry was added
        """
        session = self.get_session()
        if session is None:
            return False

        if not _add_pr(session, exercise_id, exercise_name, weight, reps):
            return False

        self._save(session)
        return True

    def record_level_up(
        self,
        exercise_id: str,
        exercise_name: str,
        new_level: Level,
    ) -> bool:
        """
        Record a level promotion earned during the session.

        One entry per exercise: a later promotion for the same exercise
        overwrites the recorded level instead of appending.

        Returns:
            True if the session was updated
        """
        session = self.get_session()
        if session is None:
            return False

        if not _add_level_up(session, exercise_id, exercise_name, new_level):
            return False

        self._save(session)
        return True

    def finalize(self) -> Optional[ActiveSession]:
        """
        Snapshot of the session for the summary screen.

        Does not clear it; call clear() once the user dismisses the summary.
        """
        return self.get_session()

    def clear(self) -> None:
        """Remove the stored session."""
        self._store.save_all([])

    def check_for_stale_session(self) -> Optional[ActiveSession]:
        """
        Surface a stale session's summary once, then clear it.

        Call on app start to show e.g. yesterday's unfinished workout.

        Returns:
            The stale session if it had logged exercises, else None
        """
        session = self.get_session_raw()
        if session is None or not self.is_stale(session):
            return None

        self.clear()
        return session if session.has_workout_data else None

    # =========================================================================
    # Timing
    # =========================================================================

    def duration(self) -> timedelta:
        """Start to last activity of the current session (zero if none)."""
        session = self.get_session()
        if session is None:
            return timedelta(0)
        return session.duration

    def minutes_since_last_activity(self) -> int:
        """Whole minutes since the last logged set (0 if no session)."""
        session = self.get_session()
        if session is None:
            return 0
        return int(session.minutes_since_activity(self._clock.now()))

    def is_inactive(self) -> bool:
        """True when the user has been idle long enough to be prompted."""
        if self.get_session() is None:
            return False
        return self.minutes_since_last_activity() >= self._inactivity_minutes

    # =========================================================================
    # Observation
    # =========================================================================

    def subscribe(self, callback: ChangeCallback) -> Unsubscribe:
        """Be told (with no payload) whenever the session document changes."""
        return self._notifier.subscribe(callback)

    # =========================================================================
    # Internals
    # =========================================================================

    def _new_session(self) -> ActiveSession:
        now = self._clock.now()
        return ActiveSession(start_time=now, last_activity_time=now)

    def _save(self, session: ActiveSession) -> None:
        self._store.save_all([session.model_dump(mode="json")])


def _add_pr(
    session: ActiveSession,
    exercise_id: str,
    exercise_name: str,
    weight: float,
    reps: int,
) -> bool:
    """Append a PR unless (exercise_id, weight) is already recorded."""
    already_recorded = any(
        pr.exercise_id == exercise_id and pr.weight == weight
        for pr in session.prs_achieved
    )
    if already_recorded:
        return False

    session.prs_achieved.append(
        PRAchievement(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            weight=weight,
            reps=reps,
        )
    )
    return True


def _add_level_up(
    session: ActiveSession,
    exercise_id: str,
    exercise_name: str,
    new_level: Level,
) -> bool:
    """Record a promotion, overwriting an earlier one for the same exercise."""
    for level_up in session.level_ups:
        if level_up.exercise_id == exercise_id:
            if level_up.new_level == new_level:
                return False
            level_up.new_level = Level(new_level)
            return True

    session.level_ups.append(
        LevelUp(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            new_level=new_level,
        )
    )
    return True
