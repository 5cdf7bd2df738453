"""
codeclimb/learn/progress.py

Per-user completion bookkeeping and the sequential unlock rule.
The database owns CompletionRecords; a ProgressLedger is only a read/write
view of them for one learner session.
"""
from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Optional, Set

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from codeclimb import db
from codeclimb.models import CompletionRecord
from codeclimb.learn.curriculum import normalize_track


@dataclass(frozen=True)
class LearnerSession:
    """Who the ledger is acting for. user_id is None for anonymous visitors."""

    user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def from_user(cls, user) -> "LearnerSession":
        if user is None or not getattr(user, "is_authenticated", False):
            return cls()
        return cls(user_id=user.id)


class CompletionResult(enum.Enum):
    ACCEPTED = "accepted"
    ALREADY_COMPLETE = "already_complete"
    REJECTED = "rejected"      # out of sequence / no user: silent no-op
    FAILED = "failed"          # persistence error, nothing changed

    @property
    def ok(self) -> bool:
        return self in (CompletionResult.ACCEPTED, CompletionResult.ALREADY_COMPLETE)


class ProgressLedger:

    def __init__(self, session: LearnerSession, allow_anonymous_level_one: bool = False):
        self.session = session
        self.allow_anonymous_level_one = allow_anonymous_level_one
        self._completed: Dict[str, Set[int]] = defaultdict(set)
        self.loaded = False

    def load(self) -> "ProgressLedger":
        """Rebuild the progress map from every CompletionRecord of this user."""
        self._completed = defaultdict(set)
        if self.session.is_authenticated:
            rows = CompletionRecord.query.filter_by(user_id=self.session.user_id).all()
            for r in rows:
                self._completed[r.track].add(r.level)
        self.loaded = True
        return self

    # ── Queries ───────────────────────────────────────────────────────────────

    def is_unlocked(self, track: str, level: int) -> bool:
        if level < 1:
            return False
        if not self.session.is_authenticated:
            return level == 1 and self.allow_anonymous_level_one
        if level == 1:
            return True
        return (level - 1) in self._completed.get(normalize_track(track), set())

    def is_completed(self, track: str, level: int) -> bool:
        return level in self._completed.get(normalize_track(track), set())

    def highest_completed(self, track: str) -> int:
        return max(self._completed.get(normalize_track(track), set()), default=0)

    def completed_count(self, track: str) -> int:
        return len(self._completed.get(normalize_track(track), set()))

    def total_completed(self) -> int:
        return sum(len(levels) for levels in self._completed.values())

    def progress_map(self) -> Dict[str, Set[int]]:
        return {track: set(levels) for track, levels in self._completed.items() if levels}

    # ── Commands ──────────────────────────────────────────────────────────────

    def complete_level(self, track: str, level: int) -> CompletionResult:
        """
        Record a completion, only in sequence: level must be at most one past
        the highest completed level. Anything else is a silent no-op.
        """
        key = normalize_track(track)
        if not self.session.is_authenticated:
            return CompletionResult.REJECTED
        if level < 1 or level > self.highest_completed(key) + 1:
            current_app.logger.warning(
                "Rejected out-of-sequence completion user=%s %s/%s",
                self.session.user_id, key, level,
            )
            return CompletionResult.REJECTED
        if self.is_completed(key, level):
            return CompletionResult.ALREADY_COMPLETE

        try:
            existing = CompletionRecord.query.filter_by(
                user_id=self.session.user_id, track=key, level=level
            ).first()
            if not existing:
                db.session.add(CompletionRecord(
                    user_id=self.session.user_id, track=key, level=level,
                ))
                db.session.commit()
        except IntegrityError:
            # a concurrent submit inserted the same triple first
            db.session.rollback()
            if self._record_exists(key, level):
                self._completed[key].add(level)
                return CompletionResult.ALREADY_COMPLETE
            current_app.logger.error(
                "Could not save completion user=%s %s/%s: integrity error",
                self.session.user_id, key, level,
            )
            return CompletionResult.FAILED
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(
                "Could not save completion user=%s %s/%s: %s",
                self.session.user_id, key, level, exc,
            )
            return CompletionResult.FAILED

        self._completed[key].add(level)
        return CompletionResult.ACCEPTED

    def _record_exists(self, track: str, level: int) -> bool:
        try:
            return CompletionRecord.query.filter_by(
                user_id=self.session.user_id, track=track, level=level
            ).first() is not None
        except SQLAlchemyError:
            db.session.rollback()
            return False
