from __future__ import annotations

from flask import (render_template, redirect, url_for,
                   flash, request, jsonify, session, current_app)
from flask_login import login_required, current_user

from codeclimb.learn import learn
from codeclimb.learn.curriculum import list_tracks, get_track, normalize_track
from codeclimb.learn.progress import LearnerSession, ProgressLedger, CompletionResult
from codeclimb.learn.quiz import QuizAttempt, QuizError, session_key
from codeclimb.learn.resolver import get_resolver
from codeclimb.learn.simulator import simulate_output, check_output


# ── Helpers ───────────────────────────────────────────────────────────────────
def _ledger() -> ProgressLedger:
    """Progress view for the logged-in user, rebuilt from the database."""
    return ProgressLedger(
        LearnerSession.from_user(current_user),
        allow_anonymous_level_one=current_app.config.get("ANONYMOUS_LEVEL_ONE_UNLOCKED", False),
    ).load()


def _gate(ledger: ProgressLedger, track: str, level: int):
    """
    Return (track_key, None) when the level may be opened, otherwise
    (track_key, reason) for unknown tracks, out-of-range or locked levels.
    """
    key = normalize_track(track)
    if get_track(key) is None:
        return key, "Unknown track."
    if not 1 <= level <= current_app.config["MAX_LEVEL"]:
        return key, "That level does not exist."
    if not ledger.is_unlocked(key, level):
        return key, "Complete the previous level to unlock this one."
    return key, None


# Only the attempt for the level currently open is kept in the session.
ATTEMPT_SESSION_KEY = "quiz_attempt"


def _load_attempt(key: str, level: int, total: int) -> QuizAttempt:
    stored = session.get(ATTEMPT_SESSION_KEY)
    if not isinstance(stored, dict) or stored.get("key") != session_key(key, level):
        return QuizAttempt(total=total)
    return QuizAttempt.from_dict(stored.get("attempt"), total)


def _save_attempt(key: str, level: int, attempt: QuizAttempt) -> None:
    session[ATTEMPT_SESSION_KEY] = {"key": session_key(key, level), "attempt": attempt.to_dict()}


def _json_field(name: str):
    """A string field from the JSON body; None when the body or the field has the wrong type."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    value = data.get(name, "")
    return value if isinstance(value, str) else None


# ── Routes ────────────────────────────────────────────────────────────────────
@learn.route("/dashboard")
@login_required
def dashboard():
    ledger = _ledger()
    max_level = current_app.config["MAX_LEVEL"]

    track_data = []
    for t in list_tracks():
        done = ledger.completed_count(t["key"])
        track_data.append({
            "key": t["key"],
            "meta": t,
            "done": done,
            "next_level": min(ledger.highest_completed(t["key"]) + 1, max_level),
            "pct": int((done / max_level) * 100) if max_level else 0,
        })

    total_levels = len(track_data) * max_level
    total_done = ledger.total_completed()
    return render_template(
        "learn/dashboard.html",
        title="Dashboard",
        track_data=track_data,
        total_done=total_done,
        total_levels=total_levels,
        overall_pct=round((total_done / total_levels) * 100, 1) if total_levels else 0,
    )


@learn.route("/learn/<track>/<int:level>")
@login_required
def level_page(track, level):
    ledger = _ledger()
    key, reason = _gate(ledger, track, level)
    if reason:
        flash(f"Level Locked. {reason}", "warning")
        return redirect(url_for("learn.dashboard"))

    content = get_resolver().resolve(key, level)
    # every visit starts a fresh attempt
    _save_attempt(key, level, QuizAttempt(total=len(content.quiz)))

    return render_template(
        "learn/level.html",
        title=content.title,
        track=get_track(key),
        level=level,
        content=content,
        completed=ledger.is_completed(key, level),
    )


@learn.route("/learn/<track>/<int:level>/content")
@login_required
def level_content(track, level):
    ledger = _ledger()
    key, reason = _gate(ledger, track, level)
    if reason:
        return jsonify({"error": reason}), 403
    return jsonify(get_resolver().resolve(key, level).to_dict())


@learn.route("/learn/<track>/<int:level>/quiz/answer", methods=["POST"])
@login_required
def quiz_answer(track, level):
    ledger = _ledger()
    key, reason = _gate(ledger, track, level)
    if reason:
        return jsonify({"success": False, "message": reason}), 403

    content = get_resolver().resolve(key, level)
    if content.placeholder:
        return jsonify({"success": False,
                        "message": "This level's content is still loading. Try again shortly."}), 409

    selected = _json_field("answer")
    if selected is None:
        return jsonify({"success": False, "message": "Answer must be text."}), 400
    if not selected:
        return jsonify({"success": False, "message": "Choose an option before submitting."}), 400

    attempt = _load_attempt(key, level, len(content.quiz))
    question = content.quiz[min(attempt.index, len(content.quiz) - 1)]
    try:
        outcome = attempt.answer(question, selected)
    except QuizError as exc:
        return jsonify({"success": False, "message": str(exc)}), 409
    _save_attempt(key, level, attempt)

    level_complete = False
    if not outcome.correct:
        message = "Incorrect answer. Try again! Review the theory if needed."
    elif outcome.just_passed:
        result = ledger.complete_level(key, level)
        level_complete = result.ok
        if result is CompletionResult.FAILED:
            message = "All correct, but your progress could not be saved. Please submit again."
            # let the user re-submit the last answer
            attempt.finished = False
            attempt.passed = False
            _save_attempt(key, level, attempt)
        else:
            message = f"All questions correct! Level {level} complete."
    elif outcome.finished:
        message = "Some answers were wrong. Review and retry the quiz."
    else:
        message = "Correct!"

    return jsonify({
        "success": True,
        "correct": outcome.correct,
        "correct_answer": outcome.correct_answer,
        "index": outcome.index,
        "total": outcome.total,
        "finished": outcome.finished,
        "passed": outcome.passed,
        "level_complete": level_complete,
        "message": message,
    })


@learn.route("/learn/<track>/<int:level>/quiz/reset", methods=["POST"])
@login_required
def quiz_reset(track, level):
    ledger = _ledger()
    key, reason = _gate(ledger, track, level)
    if reason:
        return jsonify({"success": False, "message": reason}), 403
    content = get_resolver().resolve(key, level)
    _save_attempt(key, level, QuizAttempt(total=len(content.quiz)))
    return jsonify({"success": True, "index": 0, "total": len(content.quiz)})


@learn.route("/learn/<track>/<int:level>/run", methods=["POST"])
@login_required
def run_code(track, level):
    """Simulate the user's code and compare it with the first test case."""
    ledger = _ledger()
    key, reason = _gate(ledger, track, level)
    if reason:
        return jsonify({"success": False, "message": reason}), 403

    code = _json_field("code")
    if code is None:
        return jsonify({"success": False, "message": "Code must be text."}), 400
    result = simulate_output(key, code)

    content = get_resolver().resolve(key, level)
    challenge = content.coding_challenge
    expected = challenge.test_cases[0].output if challenge and challenge.test_cases else None
    passed = bool(expected is not None and not result.error and check_output(result.lines, expected))

    return jsonify({
        "output": result.output,
        "error": result.error,
        "columns": result.columns,
        "rows": result.rows,
        "expected": expected,
        "passed": passed,
    })
