"""
codeclimb/learn/resolver.py

Resolves a (track, level) pair to a complete LevelContent by trying sources
in a fixed order until one hits:

  1. AuthoredSource   – hand-written content in learn/content.py
  2. CachedSource     – previously generated content in level_content_cache
  3. GeneratedSource  – a fresh Groq generation, written to the cache first

When every source misses the caller gets a placeholder whose quiz is empty,
so the level can be viewed but never completed until real content exists.
"""
from __future__ import annotations

from typing import Optional, Sequence

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from codeclimb import db
from codeclimb.models import LevelContentCache
from codeclimb.learn.content import get_authored
from codeclimb.learn.curriculum import (
    normalize_track, is_known_track, get_topic, get_difficulty, get_title,
)
from codeclimb.learn.generator import GenerationError, generate_level_content
from codeclimb.learn.schema import (
    ContentError, LevelContent, Theory, parse_level_content,
    SOURCE_AUTHORED, SOURCE_CACHED, SOURCE_GENERATED, SOURCE_PLACEHOLDER,
)


class ContentSource:
    """One tier of the fallback chain. lookup() returns content or None for a miss."""

    name = "source"

    def lookup(self, track: str, level: int, title: str, topic: str,
               difficulty: str) -> Optional[LevelContent]:
        raise NotImplementedError


class AuthoredSource(ContentSource):
    name = SOURCE_AUTHORED

    def lookup(self, track, level, title, topic, difficulty):
        raw = get_authored(track, level)
        if raw is None:
            return None
        return parse_level_content(raw, title=title, topic=topic,
                                   difficulty=difficulty, source=SOURCE_AUTHORED)


class CachedSource(ContentSource):
    name = SOURCE_CACHED

    def lookup(self, track, level, title, topic, difficulty):
        try:
            row = LevelContentCache.query.filter_by(track=track, level=level).first()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error("Content cache read failed for %s/%s: %s", track, level, exc)
            return None
        if row is None:
            return None
        try:
            return parse_level_content(row.content, title=title, topic=topic,
                                       difficulty=difficulty, source=SOURCE_CACHED)
        except ContentError as exc:
            current_app.logger.warning("Ignoring malformed cache row %s/%s: %s", track, level, exc)
            return None


class GeneratedSource(ContentSource):
    name = SOURCE_GENERATED

    def lookup(self, track, level, title, topic, difficulty):
        if not current_app.config.get("CONTENT_GENERATION_ENABLED", True):
            return None
        try:
            payload = generate_level_content(track, level, topic, difficulty)
            content = parse_level_content(payload, title=title, topic=topic,
                                          difficulty=difficulty, source=SOURCE_GENERATED)
        except (GenerationError, ContentError) as exc:
            current_app.logger.warning("Content generation failed for %s/%s: %s", track, level, exc)
            return None

        store_cached_content(track, level, payload)
        current_app.logger.info("Generated content for %s/%s (%s)", track, level, topic)
        return content


def store_cached_content(track: str, level: int, payload: dict) -> bool:
    """
    Insert-or-replace the cache row for (track, level). Two first-time
    generations racing each other both land here; the last commit wins.
    Returns False (after rolling back) when the write fails.
    """
    try:
        row = LevelContentCache.query.filter_by(track=track, level=level).first()
        if row:
            row.content = payload
        else:
            db.session.add(LevelContentCache(track=track, level=level, content=payload))
        db.session.commit()
        return True
    except SQLAlchemyError:
        db.session.rollback()

    # lost an insert race: the row exists now, overwrite it
    try:
        row = LevelContentCache.query.filter_by(track=track, level=level).first()
        if row is None:
            raise SQLAlchemyError("cache row vanished during upsert")
        row.content = payload
        db.session.commit()
        return True
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error("Could not cache content for %s/%s: %s", track, level, exc)
        return False


def build_placeholder(title: str, topic: str, difficulty: str) -> LevelContent:
    return LevelContent(
        title=title,
        topic=topic,
        difficulty=difficulty,
        theory=Theory(
            content=(f"Content for \"{topic}\" is still being prepared. "
                     f"Check back shortly and revisit this level to try again."),
        ),
        quiz=[],
        coding_challenge=None,
        source=SOURCE_PLACEHOLDER,
    )


class ContentResolver:

    def __init__(self, sources: Sequence[ContentSource] | None = None,
                 max_level: int = 30, difficulty_tiers=None):
        self.sources = list(sources) if sources is not None else [
            AuthoredSource(), CachedSource(), GeneratedSource(),
        ]
        self.max_level = max_level
        self.difficulty_tiers = difficulty_tiers

    def resolve(self, track: str, level: int) -> LevelContent:
        key = normalize_track(track)
        topic = get_topic(key, level)
        difficulty = get_difficulty(level, self.difficulty_tiers)
        title = get_title(key, level)

        # unknown tracks and out-of-range levels get a placeholder, not an error
        if not is_known_track(key) or not 1 <= level <= self.max_level:
            return build_placeholder(title, topic, difficulty)

        for source in self.sources:
            content = source.lookup(key, level, title, topic, difficulty)
            if content is not None:
                return content
        return build_placeholder(title, topic, difficulty)


def get_resolver() -> ContentResolver:
    """Resolver wired to the current app's configuration."""
    return ContentResolver(
        max_level=current_app.config.get("MAX_LEVEL", 30),
        difficulty_tiers=current_app.config.get("DIFFICULTY_TIERS"),
    )
