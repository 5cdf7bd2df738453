"""
tests/test_codeclimb.py
=======================
Full unit-test suite for the CodeClimb Flask application.

Run with:
    pytest tests/test_codeclimb.py -v

Requirements (pip install -e ".[test]"):
    pytest + the Flask test client
"""

from __future__ import annotations

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# ── App bootstrap ──────────────────────────────────────────────────────────────
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite:///:memory:")
os.environ.setdefault("GROQ_API_KEY", "")   # empty → generation disabled, placeholder used

from codeclimb import create_app, db, bcrypt
from codeclimb.models import User, CompletionRecord, LevelContentCache
from codeclimb.learn.content import AUTHORED_CONTENT
from codeclimb.learn.curriculum import (
    normalize_track, is_known_track, get_track, list_tracks, is_tool_track,
    get_topic, get_difficulty, get_title,
)
from codeclimb.learn.schema import (
    ContentError, QuizQuestion, parse_level_content,
    SOURCE_AUTHORED, SOURCE_CACHED, SOURCE_GENERATED, SOURCE_PLACEHOLDER,
)
from codeclimb.learn.generator import (
    GenerationError, build_prompt, generate_level_content,
)
from codeclimb.learn.resolver import (
    ContentResolver, build_placeholder, store_cached_content,
)
from codeclimb.learn.progress import LearnerSession, ProgressLedger, CompletionResult
from codeclimb.learn.quiz import QuizAttempt, QuizError, session_key
from codeclimb.learn.simulator import simulate_output, run_sql, check_output


# ══════════════════════════════════════════════════════════════════════════════
# Fixtures / base helpers
# ══════════════════════════════════════════════════════════════════════════════

class TestConfig:
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False          # disable CSRF for form tests
    GROQ_API_KEY = ""
    GROQ_MODEL = "llama-3.3-70b-versatile"
    GROQ_TEMPERATURE = 0.7
    GROQ_MAX_TOKENS = 4000
    CONTENT_GENERATION_ENABLED = True
    MAX_LEVEL = 30
    DIFFICULTY_TIERS = ((10, "Beginner"), (20, "Intermediate"))
    ANONYMOUS_LEVEL_ONE_UNLOCKED = False
    SERVER_NAME = None


@pytest.fixture(scope="function")
def app():
    """Create a fresh app + in-memory DB for every test function."""
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ── Helpers ────────────────────────────────────────────────────────────────────

def _create_user(username="testuser", email="test@example.com",
                 password="password123"):
    hashed = bcrypt.generate_password_hash(password).decode("utf-8")
    user = User(username=username, email=email, password=hashed)
    db.session.add(user)
    db.session.commit()
    return user


def _login(client, email="test@example.com", password="password123"):
    return client.post(
        "/login",
        data={"email": email, "password": password},
        follow_redirects=True,
    )


def _complete(user, track, *levels):
    for level in levels:
        db.session.add(CompletionRecord(user_id=user.id, track=track, level=level))
    db.session.commit()


def _payload(topic="Getting Started", answer="git init"):
    return {
        "theory": {
            "content": f"{topic} explained in detail.",
            "syntax": "git <command>",
            "codeExample": "git init\ngit status",
        },
        "quiz": [
            {
                "question": "Which command creates a repository?",
                "options": ["git init", "git push", "git pull", "git log"],
                "correctAnswer": answer,
            },
        ],
        "codingChallenge": {
            "problem": "Create a repository.",
            "tasks": ["Run git init"],
            "constraints": ["Use the CLI"],
            "testCases": [{"input": "None", "output": "Initialized empty Git repository"}],
            "hints": ["Look at git init"],
        },
    }


def _mock_response(content: str) -> MagicMock:
    mock_resp = MagicMock()
    mock_resp.choices[0].message.content = content
    return mock_resp


# ══════════════════════════════════════════════════════════════════════════════
# 1. MODEL TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestUserModel:

    def test_user_creation(self, app):
        user = _create_user()
        assert user.id is not None
        assert user.username == "testuser"
        assert user.created_at is not None
        assert user.completions == []

    def test_user_unique_email(self, app):
        _create_user(username="user1", email="same@example.com")
        with pytest.raises(IntegrityError):
            _create_user(username="user2", email="same@example.com")

    def test_user_repr(self, app):
        user = _create_user()
        assert "testuser" in repr(user)


class TestCompletionRecordModel:

    def test_record_links_to_user(self, app):
        user = _create_user()
        _complete(user, "c", 1)
        assert len(user.completions) == 1
        assert user.completions[0].track == "c"
        assert user.completions[0].completed_at is not None

    def test_duplicate_completion_rejected_by_db(self, app):
        user = _create_user()
        _complete(user, "c", 1)
        with pytest.raises(IntegrityError):
            _complete(user, "c", 1)


class TestLevelContentCacheModel:

    def test_json_content_roundtrip(self, app):
        db.session.add(LevelContentCache(track="git", level=1, content=_payload()))
        db.session.commit()
        row = LevelContentCache.query.filter_by(track="git", level=1).first()
        assert row.content["quiz"][0]["correctAnswer"] == "git init"

    def test_one_row_per_track_level(self, app):
        db.session.add(LevelContentCache(track="git", level=1, content=_payload()))
        db.session.commit()
        db.session.add(LevelContentCache(track="git", level=1, content=_payload()))
        with pytest.raises(IntegrityError):
            db.session.commit()


# ══════════════════════════════════════════════════════════════════════════════
# 2. CURRICULUM TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestCurriculum:

    def test_registry_contains_languages_and_tools(self):
        keys = {t["key"] for t in list_tracks()}
        assert {"c", "cpp", "java", "python", "html", "css", "javascript"} <= keys
        assert {"sql", "git", "linux", "dsa", "rest-apis", "json", "debugging", "regex"} <= keys

    def test_aliases_normalize(self):
        assert normalize_track("C++") == "cpp"
        assert normalize_track("js") == "javascript"
        assert normalize_track(" Python ") == "python"
        assert get_track("c++")["name"] == "C++"

    def test_unknown_track(self):
        assert not is_known_track("rust")
        assert get_track("rust") is None

    def test_tool_tracks(self):
        assert is_tool_track("git")
        assert not is_tool_track("python")

    def test_topic_lookup(self):
        assert get_topic("python", 1) == "Introduction to Python"

    def test_topic_wraps_around(self):
        assert get_topic("python", 31) == get_topic("python", 1)

    def test_unknown_track_uses_generic_topics(self):
        assert get_topic("rust", 1) == "Getting Started"

    @pytest.mark.parametrize("level,label", [
        (1, "Beginner"), (10, "Beginner"),
        (11, "Intermediate"), (20, "Intermediate"),
        (21, "Advanced"), (30, "Advanced"),
    ])
    def test_difficulty_tiers(self, level, label):
        assert get_difficulty(level) == label

    def test_custom_difficulty_tiers(self):
        assert get_difficulty(4, ((5, "Easy"),)) == "Easy"
        assert get_difficulty(6, ((5, "Easy"),)) == "Advanced"

    def test_title_format(self):
        assert get_title("python", 1) == "Level 1 – Introduction to Python"


# ══════════════════════════════════════════════════════════════════════════════
# 3. CONTENT SCHEMA TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestContentSchema:

    def _parse(self, raw):
        return parse_level_content(raw, title="T", topic="Topic",
                                   difficulty="Beginner", source=SOURCE_GENERATED)

    def test_every_authored_level_is_valid(self):
        for track, levels in AUTHORED_CONTENT.items():
            for level, raw in levels.items():
                content = parse_level_content(raw, title="", topic="", difficulty="",
                                              source=SOURCE_AUTHORED)
                assert content.quiz, f"{track}/{level} has no quiz"
                for q in content.quiz:
                    assert q.correct_answer in q.options, f"{track}/{level}"

    def test_valid_payload(self):
        content = self._parse(_payload())
        assert content.theory.code_example == "git init\ngit status"
        assert content.quiz[0].correct_answer == "git init"
        assert content.coding_challenge.test_cases[0].output == "Initialized empty Git repository"
        assert content.source == SOURCE_GENERATED

    def test_payload_roundtrip_keeps_wire_keys(self):
        payload = _payload()
        assert self._parse(payload).payload() == payload

    def test_answer_not_in_options_rejected(self):
        with pytest.raises(ContentError):
            self._parse(_payload(answer="git clone"))

    def test_missing_theory_rejected(self):
        raw = _payload()
        del raw["theory"]
        with pytest.raises(ContentError):
            self._parse(raw)

    def test_empty_quiz_rejected(self):
        raw = _payload()
        raw["quiz"] = []
        with pytest.raises(ContentError):
            self._parse(raw)

    def test_quiz_must_be_list(self):
        raw = _payload()
        raw["quiz"] = {"question": "?"}
        with pytest.raises(ContentError):
            self._parse(raw)

    def test_challenge_is_optional(self):
        raw = _payload()
        del raw["codingChallenge"]
        assert self._parse(raw).coding_challenge is None

    def test_source_ignored_in_equality(self):
        a = self._parse(_payload())
        b = parse_level_content(_payload(), title="T", topic="Topic",
                                difficulty="Beginner", source=SOURCE_CACHED)
        assert a == b

    def test_to_dict_flags_placeholder(self):
        placeholder = build_placeholder("Level 1 – X", "X", "Beginner")
        data = placeholder.to_dict()
        assert data["placeholder"] is True
        assert data["quiz"] == []


# ══════════════════════════════════════════════════════════════════════════════
# 4. GENERATOR TESTS  (mocked — no real API calls)
# ══════════════════════════════════════════════════════════════════════════════

class TestGenerator:

    def test_prompt_mentions_topic_and_level(self):
        prompt = build_prompt("python", 3, "Data Types", "Beginner")
        assert '"Data Types"' in prompt
        assert "Level 3 of 30" in prompt
        assert "programming language track" in prompt

    def test_prompt_for_tool_track(self):
        prompt = build_prompt("git", 1, "Getting Started", "Beginner")
        assert "tools/technology track" in prompt

    def test_missing_api_key_raises(self, app):
        with pytest.raises(GenerationError):
            generate_level_content("git", 1, "Getting Started", "Beginner")

    @patch("codeclimb.learn.generator.Groq")
    def test_generation_success(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        mock_groq.return_value.chat.completions.create.return_value = \
            _mock_response(json.dumps(_payload()))

        data = generate_level_content("git", 1, "Getting Started", "Beginner")
        assert data["quiz"][0]["correctAnswer"] == "git init"
        mock_groq.assert_called_once_with(api_key="test-key")

    @patch("codeclimb.learn.generator.Groq")
    def test_generation_strips_markdown_fences(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        raw = "```json\n" + json.dumps(_payload()) + "\n```"
        mock_groq.return_value.chat.completions.create.return_value = _mock_response(raw)

        data = generate_level_content("git", 1, "Getting Started", "Beginner")
        assert data["theory"]["syntax"] == "git <command>"

    @patch("codeclimb.learn.generator.Groq")
    def test_invalid_json_raises(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        mock_groq.return_value.chat.completions.create.return_value = \
            _mock_response("this is not json at all")
        with pytest.raises(GenerationError):
            generate_level_content("git", 1, "Getting Started", "Beginner")

    @patch("codeclimb.learn.generator.Groq")
    def test_api_error_raises(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        mock_groq.return_value.chat.completions.create.side_effect = Exception("API error")
        with pytest.raises(GenerationError):
            generate_level_content("git", 1, "Getting Started", "Beginner")

    @patch("codeclimb.learn.generator.Groq")
    def test_bad_structure_raises(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        mock_groq.return_value.chat.completions.create.return_value = \
            _mock_response(json.dumps(_payload(answer="not an option")))
        with pytest.raises(GenerationError):
            generate_level_content("git", 1, "Getting Started", "Beginner")


# ══════════════════════════════════════════════════════════════════════════════
# 5. CONTENT RESOLVER TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestContentResolver:

    def test_authored_content(self, app):
        content = ContentResolver().resolve("python", 1)
        assert content.source == SOURCE_AUTHORED
        assert content.topic == "Introduction to Python"
        assert content.title == "Level 1 – Introduction to Python"
        assert content.difficulty == "Beginner"
        assert content.quiz

    def test_alias_resolves_authored(self, app):
        content = ContentResolver().resolve("c++", 1)
        assert content.source == SOURCE_AUTHORED

    def test_authored_wins_over_cache(self, app):
        db.session.add(LevelContentCache(track="python", level=1, content=_payload()))
        db.session.commit()
        assert ContentResolver().resolve("python", 1).source == SOURCE_AUTHORED

    @patch("codeclimb.learn.generator.Groq")
    def test_unknown_track_placeholder_without_generation(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        content = ContentResolver().resolve("rust", 1)
        assert content.placeholder
        assert content.quiz == []
        mock_groq.assert_not_called()

    @pytest.mark.parametrize("level", [0, 31])
    def test_out_of_range_level_placeholder(self, app, level):
        assert ContentResolver().resolve("python", level).placeholder

    def test_generation_disabled_gives_placeholder(self, app):
        content = ContentResolver().resolve("git", 1)
        assert content.source == SOURCE_PLACEHOLDER
        assert LevelContentCache.query.count() == 0

    def test_cached_content_served(self, app):
        db.session.add(LevelContentCache(track="git", level=1, content=_payload()))
        db.session.commit()
        content = ContentResolver().resolve("git", 1)
        assert content.source == SOURCE_CACHED
        assert content.quiz[0].correct_answer == "git init"

    def test_malformed_cache_row_ignored(self, app):
        db.session.add(LevelContentCache(track="git", level=1, content={"theory": {}}))
        db.session.commit()
        assert ContentResolver().resolve("git", 1).placeholder

    @patch("codeclimb.learn.generator.Groq")
    def test_generated_content_is_cached_and_reused(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        create = mock_groq.return_value.chat.completions.create
        create.return_value = _mock_response(json.dumps(_payload()))

        first = ContentResolver().resolve("git", 1)
        assert first.source == SOURCE_GENERATED
        assert LevelContentCache.query.filter_by(track="git", level=1).count() == 1

        create.side_effect = Exception("should not be called")
        second = ContentResolver().resolve("git", 1)
        assert second.source == SOURCE_CACHED
        assert second == first
        assert create.call_count == 1

    @patch("codeclimb.learn.generator.Groq")
    def test_failed_generation_not_cached(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        mock_groq.return_value.chat.completions.create.return_value = \
            _mock_response(json.dumps(_payload(answer="git clone")))

        content = ContentResolver().resolve("git", 1)
        assert content.placeholder
        assert LevelContentCache.query.count() == 0

    @patch("codeclimb.learn.generator.Groq")
    def test_generation_switch_off(self, mock_groq, app):
        app.config["GROQ_API_KEY"] = "test-key"
        app.config["CONTENT_GENERATION_ENABLED"] = False
        assert ContentResolver().resolve("git", 1).placeholder
        mock_groq.assert_not_called()

    def test_store_cached_content_upserts(self, app):
        assert store_cached_content("git", 1, _payload())
        assert store_cached_content("git", 1, _payload(topic="Second"))
        rows = LevelContentCache.query.filter_by(track="git", level=1).all()
        assert len(rows) == 1
        assert rows[0].content["theory"]["content"].startswith("Second")


# ══════════════════════════════════════════════════════════════════════════════
# 6. PROGRESS LEDGER TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestProgressLedger:

    def _ledger(self, user, **kwargs):
        return ProgressLedger(LearnerSession(user_id=user.id), **kwargs).load()

    def test_level_one_always_unlocked(self, app):
        ledger = self._ledger(_create_user())
        assert ledger.is_unlocked("python", 1)
        assert not ledger.is_unlocked("python", 2)
        assert not ledger.is_unlocked("python", 0)

    def test_sequential_unlock(self, app):
        user = _create_user()
        _complete(user, "c", 1, 2)
        ledger = self._ledger(user)

        assert ledger.is_unlocked("c", 3)
        assert not ledger.is_unlocked("c", 4)

        assert ledger.complete_level("c", 4) is CompletionResult.REJECTED
        assert not ledger.is_completed("c", 4)

        assert ledger.complete_level("c", 3) is CompletionResult.ACCEPTED
        assert ledger.is_unlocked("c", 4)
        assert ledger.highest_completed("c") == 3

    def test_tracks_are_independent(self, app):
        user = _create_user()
        _complete(user, "c", 1)
        ledger = self._ledger(user)
        assert ledger.is_unlocked("c", 2)
        assert not ledger.is_unlocked("python", 2)

    def test_completion_is_idempotent(self, app):
        user = _create_user()
        ledger = self._ledger(user)
        assert ledger.complete_level("python", 1) is CompletionResult.ACCEPTED
        assert ledger.complete_level("python", 1) is CompletionResult.ALREADY_COMPLETE
        assert CompletionRecord.query.filter_by(user_id=user.id).count() == 1

    def test_completion_persists_across_loads(self, app):
        user = _create_user()
        self._ledger(user).complete_level("python", 1)
        reloaded = self._ledger(user)
        assert reloaded.is_completed("python", 1)
        assert reloaded.progress_map() == {"python": {1}}

    def test_alias_writes_canonical_track(self, app):
        user = _create_user()
        self._ledger(user).complete_level("c++", 1)
        assert CompletionRecord.query.first().track == "cpp"

    def test_persistence_failure_leaves_map_unchanged(self, app):
        user = _create_user()
        ledger = self._ledger(user)
        with patch.object(db.session, "commit", side_effect=SQLAlchemyError("disk full")):
            result = ledger.complete_level("python", 1)
        assert result is CompletionResult.FAILED
        assert not result.ok
        assert not ledger.is_completed("python", 1)
        assert CompletionRecord.query.count() == 0

    def test_concurrent_submit_counts_as_already_complete(self, app):
        user = _create_user()
        user_id = user.id
        ledger = self._ledger(user)
        real_commit = db.session.registry().commit

        def racing_commit():
            # the other request's row lands first, ours hits the unique key
            db.session.rollback()
            db.session.execute(CompletionRecord.__table__.insert().values(
                user_id=user_id, track="python", level=1,
            ))
            real_commit()
            raise IntegrityError("INSERT INTO completion_record", {},
                                 Exception("UNIQUE constraint failed"))

        with patch.object(db.session, "commit", side_effect=racing_commit):
            result = ledger.complete_level("python", 1)
        assert result is CompletionResult.ALREADY_COMPLETE
        assert result.ok
        assert ledger.is_completed("python", 1)
        assert CompletionRecord.query.filter_by(user_id=user_id).count() == 1

    def test_counts(self, app):
        user = _create_user()
        _complete(user, "c", 1, 2, 3)
        _complete(user, "sql", 1)
        ledger = self._ledger(user)
        assert ledger.completed_count("c") == 3
        assert ledger.total_completed() == 4

    def test_anonymous_everything_locked(self, app):
        ledger = ProgressLedger(LearnerSession()).load()
        assert not ledger.is_unlocked("python", 1)
        assert ledger.complete_level("python", 1) is CompletionResult.REJECTED
        assert ledger.progress_map() == {}

    def test_anonymous_level_one_when_enabled(self, app):
        ledger = ProgressLedger(LearnerSession(), allow_anonymous_level_one=True).load()
        assert ledger.is_unlocked("python", 1)
        assert not ledger.is_unlocked("python", 2)
        assert ledger.complete_level("python", 1) is CompletionResult.REJECTED

    def test_session_from_anonymous_user(self):
        anon = MagicMock(is_authenticated=False)
        assert LearnerSession.from_user(anon).user_id is None
        assert LearnerSession.from_user(None).user_id is None


# ══════════════════════════════════════════════════════════════════════════════
# 7. QUIZ ATTEMPT TESTS  (pure unit tests)
# ══════════════════════════════════════════════════════════════════════════════

class TestQuizAttempt:

    def setup_method(self):
        self.questions = [
            QuizQuestion(question=f"Q{i}?", options=["A", "B", "C", "D"], correct_answer="A")
            for i in range(3)
        ]

    def test_correct_answer_advances(self):
        attempt = QuizAttempt(total=3)
        outcome = attempt.answer(self.questions[0], "A")
        assert outcome.correct
        assert outcome.index == 1
        assert not outcome.finished

    def test_wrong_answer_stays_on_question(self):
        attempt = QuizAttempt(total=3)
        outcome = attempt.answer(self.questions[0], "B")
        assert not outcome.correct
        assert outcome.correct_answer == "A"
        assert outcome.index == 0
        assert attempt.results[0] is False

    def test_all_correct_passes(self):
        attempt = QuizAttempt(total=3)
        for q in self.questions:
            outcome = attempt.answer(q, "A")
        assert outcome.finished
        assert outcome.passed
        assert outcome.just_passed

    def test_retry_after_wrong_answer_still_passes(self):
        attempt = QuizAttempt(total=3)
        attempt.answer(self.questions[0], "C")
        for q in self.questions:
            outcome = attempt.answer(q, "A")
        assert outcome.passed

    def test_answer_after_finish_raises(self):
        attempt = QuizAttempt(total=1)
        attempt.answer(self.questions[0], "A")
        with pytest.raises(QuizError):
            attempt.answer(self.questions[0], "A")

    def test_empty_quiz_cannot_be_answered(self):
        with pytest.raises(QuizError):
            QuizAttempt(total=0).answer(self.questions[0], "A")

    def test_session_roundtrip(self):
        attempt = QuizAttempt(total=3)
        attempt.answer(self.questions[0], "A")
        restored = QuizAttempt.from_dict(attempt.to_dict(), 3)
        assert restored == attempt

    def test_stale_session_state_discarded(self):
        attempt = QuizAttempt(total=3)
        attempt.answer(self.questions[0], "A")
        restored = QuizAttempt.from_dict(attempt.to_dict(), 5)
        assert restored.index == 0
        assert restored.total == 5

    def test_session_key(self):
        assert session_key("c", 2) == "quiz_c_2"


# ══════════════════════════════════════════════════════════════════════════════
# 8. SIMULATOR TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestSimulator:

    def test_python_print(self):
        result = simulate_output("python", 'print("Hello, CodeClimb!")\nprint("Alice")')
        assert result.lines == ["Hello, CodeClimb!", "Alice"]
        assert result.error == ""

    def test_python_print_multiple_args(self):
        assert simulate_output("python", 'print("a", "b")').output == "a b"

    def test_c_printf(self):
        code = '#include <stdio.h>\nint main() {\n    printf("Hello, CodeClimb!\\n");\n}'
        assert simulate_output("c", code).lines == ["Hello, CodeClimb!"]

    def test_cpp_cout(self):
        code = 'std::cout << "Hello" << std::endl;\ncout << "World" << endl;'
        assert simulate_output("c++", code).lines == ["Hello", "World"]

    def test_java_println(self):
        code = 'System.out.print("Hello, ");\nSystem.out.println("CodeClimb!");'
        assert simulate_output("java", code).lines == ["Hello, CodeClimb!"]

    def test_javascript_console_log(self):
        assert simulate_output("js", "console.log('hi');").lines == ["hi"]

    def test_comments_skipped(self):
        assert simulate_output("python", '# print("no")\nprint("yes")').lines == ["yes"]

    def test_no_output_statements(self):
        assert simulate_output("python", "x = 1").error == "No output statements found."

    def test_html_is_preview_only(self):
        assert "browser" in simulate_output("html", "<h1>Hi</h1>").error

    def test_unsupported_track(self):
        assert simulate_output("git", "git init").error

    def test_sql_select(self):
        result = run_sql("SELECT name FROM students ORDER BY id")
        assert result.columns == ["name"]
        assert result.lines[0] == "name"
        assert result.lines[1] == "Alice"
        assert len(result.rows) == 6

    def test_sql_error_reported(self):
        result = simulate_output("sql", "SELECT * FROM missing_table")
        assert result.error.startswith("SQL Error")
        assert result.lines == []

    def test_sql_runs_on_fresh_database(self):
        run_sql("DELETE FROM students")
        assert len(run_sql("SELECT * FROM students").rows) == 6

    @patch("codeclimb.learn.simulator.SQL_TIME_LIMIT", 0.2)
    def test_sql_runaway_query_times_out(self):
        result = run_sql(
            "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c) "
            "SELECT count(*) FROM c"
        )
        assert result.error.startswith("SQL Error")
        assert "timed out" in result.error
        assert result.rows == []

    def test_sql_rows_are_capped(self):
        result = run_sql(
            "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c LIMIT 2000) "
            "SELECT x FROM c"
        )
        assert result.error == ""
        assert len(result.rows) == 500

    def test_sql_non_text_query(self):
        assert run_sql(5).error.startswith("SQL Error")

    def test_check_output_ignores_trailing_whitespace(self):
        assert check_output(["Hello  ", "World", ""], "Hello\nWorld\n")
        assert not check_output(["Hello"], "Hello\nWorld")
        assert not check_output([], "")


# ══════════════════════════════════════════════════════════════════════════════
# 9. MAIN / ERROR BLUEPRINT TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestMainRoutes:

    def test_home_page(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"CodeClimb" in resp.data

    def test_home_alias(self, client):
        assert client.get("/home").status_code == 200

    def test_home_redirects_logged_in_user(self, client, app):
        _create_user()
        _login(client)
        resp = client.get("/", follow_redirects=False)
        assert resp.status_code == 302
        assert "/dashboard" in resp.headers["Location"]

    def test_404_page(self, client):
        resp = client.get("/definitely-not-here")
        assert resp.status_code == 404
        assert b"Page Not Found" in resp.data


# ══════════════════════════════════════════════════════════════════════════════
# 10. USERS BLUEPRINT TESTS
# ══════════════════════════════════════════════════════════════════════════════

class TestUserRegistration:

    def test_register_page_loads(self, client):
        assert client.get("/register").status_code == 200

    def test_register_success(self, client, app):
        resp = client.post("/register", data={
            "username": "newuser",
            "email": "new@example.com",
            "password": "password123",
            "confirm_password": "password123",
        }, follow_redirects=True)
        assert resp.status_code == 200
        assert b"account has been created" in resp.data
        user = User.query.filter_by(username="newuser").first()
        assert user is not None
        assert bcrypt.check_password_hash(user.password, "password123")

    def test_register_short_password(self, client, app):
        client.post("/register", data={
            "username": "newuser",
            "email": "new@example.com",
            "password": "abc",
            "confirm_password": "abc",
        }, follow_redirects=True)
        assert User.query.filter_by(username="newuser").first() is None

    def test_register_duplicate_email(self, client, app):
        _create_user()
        resp = client.post("/register", data={
            "username": "another",
            "email": "test@example.com",
            "password": "password123",
            "confirm_password": "password123",
        }, follow_redirects=True)
        assert b"That email is taken" in resp.data


class TestUserLogin:

    def test_login_success_lands_on_dashboard(self, client, app):
        _create_user()
        resp = _login(client)
        assert resp.status_code == 200
        assert b"Welcome back, testuser" in resp.data

    def test_login_wrong_password(self, client, app):
        _create_user()
        resp = _login(client, password="wrongpassword")
        assert b"unsuccessful" in resp.data.lower()

    def test_logout(self, client, app):
        _create_user()
        _login(client)
        client.get("/logout", follow_redirects=True)
        resp = client.get("/dashboard", follow_redirects=False)
        assert resp.status_code == 302
        assert "/login" in resp.headers["Location"]

    def test_login_follows_local_next(self, client, app):
        _create_user()
        resp = client.post("/login?next=/account", data={
            "email": "test@example.com", "password": "password123",
        }, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/account")

    @pytest.mark.parametrize("target", [
        "//evil.example/phish",
        "/\\evil.example/phish",
        "https://evil.example/phish",
    ])
    def test_login_ignores_offsite_next(self, client, app, target):
        _create_user()
        resp = client.post("/login", query_string={"next": target}, data={
            "email": "test@example.com", "password": "password123",
        }, follow_redirects=False)
        assert resp.status_code == 302
        assert "evil.example" not in resp.headers["Location"]
        assert "/dashboard" in resp.headers["Location"]


class TestUserAccount:

    def test_account_requires_login(self, client):
        resp = client.get("/account", follow_redirects=False)
        assert resp.status_code == 302
        assert "/login" in resp.headers["Location"]

    def test_account_update(self, client, app):
        _create_user()
        _login(client)
        resp = client.post("/account", data={
            "username": "updateduser",
            "email": "updated@example.com",
        }, follow_redirects=True)
        assert resp.status_code == 200
        assert User.query.filter_by(username="updateduser").first() is not None


# ══════════════════════════════════════════════════════════════════════════════
# 11. LEARN BLUEPRINT TESTS
# ══════════════════════════════════════════════════════════════════════════════

C_LEVEL_ONE_ANSWERS = [
    "Dennis Ritchie",
    ".c",
    "Includes standard input/output library",
]


class TestDashboard:

    def test_requires_login(self, client):
        resp = client.get("/dashboard", follow_redirects=False)
        assert resp.status_code == 302

    def test_lists_tracks_and_progress(self, client, app):
        user = _create_user()
        _complete(user, "c", 1, 2)
        _login(client)
        resp = client.get("/dashboard")
        assert resp.status_code == 200
        assert b"Python" in resp.data
        assert b"Continue at Level 3" in resp.data


class TestLevelRoutes:

    def test_level_one_opens(self, client, app):
        _create_user()
        _login(client)
        resp = client.get("/learn/python/1")
        assert resp.status_code == 200
        assert "Level 1 – Introduction to Python".encode() in resp.data

    def test_locked_level_redirects(self, client, app):
        _create_user()
        _login(client)
        resp = client.get("/learn/c/2", follow_redirects=False)
        assert resp.status_code == 302
        assert "/dashboard" in resp.headers["Location"]

        resp = client.get("/learn/c/2", follow_redirects=True)
        assert b"Level Locked" in resp.data

    def test_unlocked_after_completion(self, client, app):
        user = _create_user()
        _complete(user, "c", 1)
        _login(client)
        assert client.get("/learn/c/2").status_code == 200

    def test_unknown_track_redirects(self, client, app):
        _create_user()
        _login(client)
        resp = client.get("/learn/rust/1", follow_redirects=True)
        assert b"Unknown track" in resp.data

    def test_level_out_of_range_redirects(self, client, app):
        _create_user()
        _login(client)
        assert client.get("/learn/python/31").status_code == 302

    def test_placeholder_level_renders(self, client, app):
        _create_user()
        _login(client)
        resp = client.get("/learn/git/1")
        assert resp.status_code == 200
        assert b"placeholder-notice" in resp.data

    def test_content_json(self, client, app):
        _create_user()
        _login(client)
        data = client.get("/learn/python/1/content").get_json()
        assert data["source"] == "authored"
        assert data["topic"] == "Introduction to Python"
        assert data["quiz"][0]["correctAnswer"] in data["quiz"][0]["options"]

    def test_content_json_locked(self, client, app):
        _create_user()
        _login(client)
        assert client.get("/learn/python/2/content").status_code == 403


class TestQuizRoutes:

    def _answer(self, client, answer, track="c", level=1):
        return client.post(f"/learn/{track}/{level}/quiz/answer", json={"answer": answer})

    def test_full_quiz_completes_level(self, client, app):
        user = _create_user()
        _login(client)
        client.get("/learn/c/1")

        for answer in C_LEVEL_ONE_ANSWERS:
            data = self._answer(client, answer).get_json()
            assert data["correct"]
        assert data["finished"]
        assert data["passed"]
        assert data["level_complete"]

        assert CompletionRecord.query.filter_by(user_id=user.id, track="c", level=1).count() == 1
        assert client.get("/learn/c/2").status_code == 200

    def test_wrong_answer_keeps_position(self, client, app):
        _create_user()
        _login(client)
        client.get("/learn/c/1")
        data = self._answer(client, "James Gosling").get_json()
        assert not data["correct"]
        assert data["correct_answer"] == "Dennis Ritchie"
        assert data["index"] == 0
        assert not data["level_complete"]

    def test_empty_answer_rejected(self, client, app):
        _create_user()
        _login(client)
        client.get("/learn/c/1")
        assert self._answer(client, "").status_code == 400

    def test_answer_on_locked_level(self, client, app):
        _create_user()
        _login(client)
        assert self._answer(client, "x", level=2).status_code == 403

    def test_placeholder_quiz_cannot_be_answered(self, client, app):
        _create_user()
        _login(client)
        client.get("/learn/git/1")
        assert self._answer(client, "git init", track="git").status_code == 409
        assert CompletionRecord.query.count() == 0

    def test_reset_restarts_attempt(self, client, app):
        _create_user()
        _login(client)
        client.get("/learn/c/1")
        self._answer(client, C_LEVEL_ONE_ANSWERS[0])
        data = client.post("/learn/c/1/quiz/reset").get_json()
        assert data["index"] == 0
        assert data["total"] == 3
        assert self._answer(client, C_LEVEL_ONE_ANSWERS[0]).get_json()["index"] == 1

    def test_only_current_level_attempt_kept_in_session(self, client, app):
        user = _create_user()
        _complete(user, "c", 1, 2)
        _login(client)
        for path in ("/learn/c/1", "/learn/c/2", "/learn/c/3", "/learn/python/1"):
            client.get(path)
        with client.session_transaction() as sess:
            quiz_keys = [k for k in sess if k.startswith("quiz")]
            assert quiz_keys == ["quiz_attempt"]
            assert sess["quiz_attempt"]["key"] == "quiz_python_1"

    def test_opening_another_level_discards_attempt(self, client, app):
        user = _create_user()
        _complete(user, "c", 1)
        _login(client)
        client.get("/learn/c/1")
        self._answer(client, C_LEVEL_ONE_ANSWERS[0])
        client.get("/learn/c/2")
        # back on level 1 without reopening its page: the attempt starts over
        data = self._answer(client, C_LEVEL_ONE_ANSWERS[1]).get_json()
        assert not data["correct"]
        assert data["index"] == 0

    def test_non_object_body_rejected(self, client, app):
        _create_user()
        _login(client)
        client.get("/learn/c/1")
        assert client.post("/learn/c/1/quiz/answer", json=[1]).status_code == 400
        assert self._answer(client, 5).status_code == 400

    def test_failed_save_allows_resubmit(self, client, app):
        _create_user()
        _login(client)
        client.get("/learn/c/1")
        self._answer(client, C_LEVEL_ONE_ANSWERS[0])
        self._answer(client, C_LEVEL_ONE_ANSWERS[1])

        with patch("codeclimb.learn.routes.ProgressLedger.complete_level",
                   return_value=CompletionResult.FAILED):
            data = self._answer(client, C_LEVEL_ONE_ANSWERS[2]).get_json()
        assert not data["level_complete"]
        assert "could not be saved" in data["message"]
        assert CompletionRecord.query.count() == 0

        data = self._answer(client, C_LEVEL_ONE_ANSWERS[2]).get_json()
        assert data["level_complete"]
        assert CompletionRecord.query.count() == 1


class TestRunRoute:

    def test_python_output_matches_expected(self, client, app):
        _create_user()
        _login(client)
        resp = client.post("/learn/python/1/run", json={
            "code": 'print("Hello, CodeClimb!")\nname = "Alice"\nprint("Alice")',
        })
        data = resp.get_json()
        assert data["output"] == "Hello, CodeClimb!\nAlice"
        assert data["expected"] == "Hello, CodeClimb!\nAlice"
        assert data["passed"]

    def test_wrong_output_does_not_pass(self, client, app):
        _create_user()
        _login(client)
        data = client.post("/learn/python/1/run", json={"code": 'print("nope")'}).get_json()
        assert not data["passed"]

    def test_sql_query_runs(self, client, app):
        _create_user()
        _login(client)
        data = client.post("/learn/sql/1/run",
                           json={"code": "SELECT name FROM students"}).get_json()
        assert data["columns"] == ["name"]
        assert data["passed"]

    def test_run_on_locked_level(self, client, app):
        _create_user()
        _login(client)
        resp = client.post("/learn/python/2/run", json={"code": 'print("x")'})
        assert resp.status_code == 403

    def test_non_text_code_rejected(self, client, app):
        _create_user()
        _login(client)
        assert client.post("/learn/sql/1/run", json={"code": 5}).status_code == 400

        resp = client.post("/learn/sql/1/run", json=["SELECT 1"])
        assert resp.status_code == 200
        assert not resp.get_json()["passed"]


# ══════════════════════════════════════════════════════════════════════════════
# Entry point
# ══════════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
