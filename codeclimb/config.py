import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key')
    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                             os.environ.get('DATABASE_URL', 'sqlite:///site.db'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ── Content generation (Groq) ────────────────────────────────────────────
    GROQ_API_KEY = os.environ.get('GROQ_API_KEY')
    GROQ_MODEL = os.environ.get('GROQ_MODEL', 'llama-3.3-70b-versatile')
    GROQ_TEMPERATURE = float(os.environ.get('GROQ_TEMPERATURE', '0.7'))
    GROQ_MAX_TOKENS = int(os.environ.get('GROQ_MAX_TOKENS', '4000'))
    CONTENT_GENERATION_ENABLED = os.environ.get('CONTENT_GENERATION_ENABLED', '1') != '0'

    # ── Curriculum ───────────────────────────────────────────────────────────
    MAX_LEVEL = int(os.environ.get('MAX_LEVEL', '30'))
    # (upper bound inclusive, label); levels above the last bound are Advanced
    DIFFICULTY_TIERS = ((10, 'Beginner'), (20, 'Intermediate'))

    # Anonymous visitors see every level locked unless this is switched on,
    # in which case level 1 of each track is reported as unlocked.
    ANONYMOUS_LEVEL_ONE_UNLOCKED = os.environ.get('ANONYMOUS_LEVEL_ONE_UNLOCKED', '0') == '1'
