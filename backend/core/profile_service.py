"""
Profile Service.

CRUD over lifter profiles, plus exercise ratings and cloud merge. This is the
one place in the core that accepts raw user input, so it is also the one place
that raises on invalid data.

Every write is queued for cloud sync when a SyncQueue is injected.
"""
import logging
import random
import string
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from application.ports import Clock, DocumentStore, SyncQueue
from backend.core.documents import dump_documents, parse_documents
from domain.models import Level, Profile, validate_profile_fields
from domain.models.profile import MAX_PROFILES

logger = logging.getLogger(__name__)

# Fields a caller may never set directly
READ_ONLY_FIELDS = ("id", "created_at", "updated_at")
REQUIRED_FIELDS = ("name", "age", "height", "weight")


class ProfileValidationError(Exception):
    """Raised when profile fields are missing or out of range."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ProfileNotFoundError(Exception):
    """Raised when a profile id does not exist."""

    def __init__(self, profile_id: str):
        super().__init__(f"Profile not found: {profile_id}")
        self.profile_id = profile_id


class ProfileLimitError(Exception):
    """Raised when creating a profile would exceed MAX_PROFILES."""

    def __init__(self, limit: int = MAX_PROFILES):
        super().__init__(f"Maximum of {limit} profiles allowed")
        self.limit = limit


def generate_profile_id(now: datetime) -> str:
    """Unique-enough local id: profile_<epoch ms>_<7 random chars>."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"profile_{int(now.timestamp() * 1000)}_{suffix}"


def _epoch(value: datetime) -> float:
    # Naive timestamps are local time; aware ones (from the cloud) carry their offset
    return value.timestamp()


def _validated(data: Dict[str, Any]) -> Profile:
    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ProfileValidationError("Invalid profile", errors) from e


def merge_profiles(local: List[Profile], cloud: List[Profile]) -> List[Profile]:
    """
    Last-write-wins merge of local and cloud profiles.

    Profiles only in one list are kept. For a profile in both, the cloud copy
    replaces the local one only if its updated_at is strictly newer. Local
    order is preserved; cloud-only profiles are appended.
    """
    merged: Dict[str, Profile] = {p.id: p for p in local}

    for cloud_profile in cloud:
        existing = merged.get(cloud_profile.id)
        if existing is None:
            merged[cloud_profile.id] = cloud_profile
        elif _epoch(cloud_profile.updated_at) > _epoch(existing.updated_at):
            merged[cloud_profile.id] = cloud_profile

    return list(merged.values())


class ProfileService:
    """
    Lifter profiles over a DocumentStore.

    Usage:
        >>> service = ProfileService(store=store, clock=clock)
        >>> profile = service.create_profile(
        ...     {"name": "Sam", "age": 30, "height": 180, "weight": 80}
        ... )
        >>> service.update_exercise_rating(profile.id, "bench-press", Level.NOVICE)
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: Clock,
        sync_queue: Optional[SyncQueue] = None,
    ):
        self._store = store
        self._clock = clock
        self._sync_queue = sync_queue
        self._last_sync_time: Optional[datetime] = None

    # =========================================================================
    # Queries
    # =========================================================================

    def list_profiles(self) -> List[Profile]:
        return parse_documents(self._store.get_all(), Profile)

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Profile by id, or None."""
        return next((p for p in self.list_profiles() if p.id == profile_id), None)

    def profile_count(self) -> int:
        return len(self.list_profiles())

    def can_create_profile(self) -> bool:
        return self.profile_count() < MAX_PROFILES

    @property
    def last_sync_time(self) -> Optional[datetime]:
        """When cloud profiles were last merged in this process."""
        return self._last_sync_time

    # =========================================================================
    # Writes
    # =========================================================================

    def create_profile(self, data: Dict[str, Any]) -> Profile:
        """
        Create a profile from user input.

        The new profile starts with no exercise ratings.

        Raises:
            ProfileLimitError: MAX_PROFILES already exist
            ProfileValidationError: A required field is missing or a value is
                out of range
        """
        profiles = self.list_profiles()
        if len(profiles) >= MAX_PROFILES:
            raise ProfileLimitError()

        fields = {k: v for k, v in data.items() if k not in READ_ONLY_FIELDS}
        errors = [
            f"{name.capitalize()} is required"
            for name in REQUIRED_FIELDS
            if fields.get(name) is None
        ]
        errors.extend(validate_profile_fields(fields))
        if errors:
            raise ProfileValidationError("Invalid profile", errors)

        now = self._clock.now()
        fields["name"] = fields["name"].strip()
        fields["exercise_ratings"] = {}
        profile = _validated(
            {**fields, "id": generate_profile_id(now), "created_at": now, "updated_at": now}
        )

        profiles.append(profile)
        self._save(profiles)
        self._enqueue("create", profile.model_dump(mode="json"))

        logger.info(f"Created profile {profile.id}")
        return profile

    def update_profile(self, profile_id: str, data: Dict[str, Any]) -> Profile:
        """
        Apply a partial update.

        Raises:
            ProfileNotFoundError: No profile with this id
            ProfileValidationError: An updated value is out of range
        """
        changes = {k: v for k, v in data.items() if k not in READ_ONLY_FIELDS}
        errors = validate_profile_fields(changes)
        if errors:
            raise ProfileValidationError("Invalid profile", errors)

        if isinstance(changes.get("name"), str):
            changes["name"] = changes["name"].strip()

        return self._modify(
            profile_id,
            lambda profile: profile.model_copy(update=changes),
        )

    def update_exercise_rating(
        self,
        profile_id: str,
        exercise_id: str,
        level: Level,
    ) -> Profile:
        """Record the lifter's level on one exercise."""

        def apply(profile: Profile) -> Profile:
            ratings = dict(profile.exercise_ratings)
            ratings[exercise_id] = Level(level)
            return profile.model_copy(update={"exercise_ratings": ratings})

        return self._modify(profile_id, apply)

    def remove_exercise_rating(self, profile_id: str, exercise_id: str) -> Profile:
        """Forget the lifter's level on one exercise (no-op if unrated)."""

        def apply(profile: Profile) -> Profile:
            ratings = {
                k: v for k, v in profile.exercise_ratings.items() if k != exercise_id
            }
            return profile.model_copy(update={"exercise_ratings": ratings})

        return self._modify(profile_id, apply)

    def delete_profile(self, profile_id: str) -> None:
        """
        Delete a profile. Its workout history is left in place.

        Raises:
            ProfileNotFoundError: No profile with this id
        """
        profiles = self.list_profiles()
        remaining = [p for p in profiles if p.id != profile_id]
        if len(remaining) == len(profiles):
            raise ProfileNotFoundError(profile_id)

        self._save(remaining)
        self._enqueue("delete", {"id": profile_id})
        logger.info(f"Deleted profile {profile_id}")

    # =========================================================================
    # Cloud sync
    # =========================================================================

    def apply_cloud_profiles(self, cloud_items: List[Dict[str, Any]]) -> List[Profile]:
        """
        Merge already-pulled cloud profile documents into local storage.

        Returns:
            The merged profile list
        """
        cloud_profiles = parse_documents(cloud_items, Profile)
        merged = merge_profiles(self.list_profiles(), cloud_profiles)
        self._save(merged)
        self._last_sync_time = self._clock.now()

        logger.info(
            f"Merged {len(cloud_profiles)} cloud profile(s); {len(merged)} local"
        )
        return merged

    # =========================================================================
    # Internals
    # =========================================================================

    def _modify(self, profile_id: str, apply) -> Profile:
        profiles = self.list_profiles()
        index = next(
            (i for i, p in enumerate(profiles) if p.id == profile_id),
            None,
        )
        if index is None:
            raise ProfileNotFoundError(profile_id)

        updated = apply(profiles[index]).model_copy(
            update={"updated_at": self._clock.now()}
        )
        # model_copy skips validation; round-trip so bad types cannot be stored
        updated = _validated(updated.model_dump())
        profiles[index] = updated

        self._save(profiles)
        self._enqueue("update", updated.model_dump(mode="json"))
        return updated

    def _save(self, profiles: List[Profile]) -> None:
        self._store.save_all(dump_documents(profiles))

    def _enqueue(self, action: str, record: Dict[str, Any]) -> None:
        if self._sync_queue is not None:
            self._sync_queue.enqueue("profile", action, record)
