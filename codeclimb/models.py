from datetime import datetime, timezone
from codeclimb import db, login_manager
from flask_login import UserMixin


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


class User(db.Model, UserMixin):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(20), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(60), nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    completions = db.relationship('CompletionRecord', backref='user', lazy=True)

    def __repr__(self):
        return f"User('{self.username}', '{self.email}')"


class CompletionRecord(db.Model):
    """
    Durable proof that a user passed every quiz question of one level.
    Rows are only ever inserted; the (user, track, level) triple is the upsert key.
    """
    __tablename__ = 'completion_record'

    id           = db.Column(db.Integer, primary_key=True)
    user_id      = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    track        = db.Column(db.String(40), nullable=False)
    level        = db.Column(db.Integer, nullable=False)
    completed_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint('user_id', 'track', 'level', name='uq_user_track_level'),
    )

    def __repr__(self):
        return f"CompletionRecord(user={self.user_id}, track={self.track}, level={self.level})"


class LevelContentCache(db.Model):
    """
    Previously generated level content, keyed by (track, level).
    content holds the wire-format JSON exactly as validated after generation.
    """
    __tablename__ = 'level_content_cache'

    id         = db.Column(db.Integer, primary_key=True)
    track      = db.Column(db.String(40), nullable=False)
    level      = db.Column(db.Integer, nullable=False)
    content    = db.Column(db.JSON, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint('track', 'level', name='uq_track_level'),
    )

    def __repr__(self):
        return f"LevelContentCache(track={self.track}, level={self.level})"
