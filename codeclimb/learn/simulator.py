"""
codeclimb/learn/simulator.py

Simulated "Run" for the challenge editor. Nothing is compiled or executed:
output statements are pattern-matched in the source and their literal
arguments are echoed. SQL is the exception and runs against a throwaway
in-memory SQLite database seeded with sample tables.
"""
from __future__ import annotations

import re
import sqlite3
import time
from dataclasses import dataclass, field
from typing import List

from codeclimb.learn.curriculum import normalize_track

SAMPLE_SCHEMA = """
CREATE TABLE employees (
  id INTEGER PRIMARY KEY,
  name TEXT,
  salary INTEGER,
  department TEXT,
  role TEXT
);
INSERT INTO employees (name, salary, department, role) VALUES
  ('Ravi', 60000, 'IT', 'Developer'),
  ('Anu', 45000, 'HR', 'Manager'),
  ('Kiran', 75000, 'Finance', 'Analyst'),
  ('Meena', 52000, 'IT', 'Developer'),
  ('Suresh', 80000, 'IT', 'Lead'),
  ('Priya', 48000, 'HR', 'Recruiter'),
  ('Arjun', 70000, 'Finance', 'Manager'),
  ('Divya', 55000, 'Sales', 'Executive');

CREATE TABLE students (
  id INTEGER PRIMARY KEY,
  name TEXT,
  marks INTEGER,
  grade TEXT
);
INSERT INTO students (name, marks, grade) VALUES
  ('Alice', 92, 'A'),
  ('Bob', 78, 'B'),
  ('Charlie', 85, 'A'),
  ('Diana', 65, 'C'),
  ('Eve', 90, 'A'),
  ('Frank', 72, 'B');
"""

PREVIEW_ONLY = {"html", "css"}

_STRING_RE = re.compile(r'''(["'`])((?:\\.|(?!\1).)*)\1''')
_NUMBER_RE = re.compile(r'^\s*-?\d+(?:\.\d+)?\s*$')
_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "'": "'", "\\": "\\", "`": "`"}


@dataclass
class SimulationResult:
    lines: List[str] = field(default_factory=list)
    error: str = ""
    columns: List[str] = field(default_factory=list)
    rows: List[list] = field(default_factory=list)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def _literals(args: str) -> List[str]:
    found = [_unescape(m.group(2)) for m in _STRING_RE.finditer(args)]
    if not found and _NUMBER_RE.match(args):
        found = [args.strip()]
    return found


def _is_comment(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(("//", "#", "/*", "*")) and not stripped.startswith("#include")


def _simulate_line(track: str, line: str) -> str | None:
    """Output text produced by one source line, or None if it prints nothing."""
    if track == "python":
        m = re.search(r'\bprint\s*\((.*)\)', line)
        if m:
            return " ".join(_literals(m.group(1))) + "\n"
    elif track == "c":
        m = re.search(r'\bputs\s*\((.*)\)', line)
        if m:
            return "".join(_literals(m.group(1))[:1]) + "\n"
        m = re.search(r'\bprintf\s*\((.*)\)', line)
        if m:
            # only the format string is literal text
            return "".join(_literals(m.group(1))[:1])
    elif track == "cpp":
        m = re.search(r'\bcout\s*<<(.*?);', line)
        if m:
            out = []
            for part in m.group(1).split("<<"):
                part = part.strip()
                if part in ("endl", "std::endl"):
                    out.append("\n")
                else:
                    out.extend(_literals(part))
            return "".join(out)
    elif track == "java":
        m = re.search(r'System\.out\.(println|print)\s*\((.*)\)', line)
        if m:
            text = "".join(_literals(m.group(2)))
            return text + "\n" if m.group(1) == "println" else text
    elif track == "javascript":
        m = re.search(r'\bconsole\.log\s*\((.*)\)', line)
        if m:
            return " ".join(_literals(m.group(1))) + "\n"
    return None


def simulate_output(track: str, code: str) -> SimulationResult:
    track = normalize_track(track)
    if track == "sql":
        return run_sql(code)
    if track in PREVIEW_ONLY:
        return SimulationResult(error=f"{track.upper()} is rendered by the browser; there is no console output.")
    if track not in {"python", "c", "cpp", "java", "javascript"}:
        return SimulationResult(error=f"Running {track} code is not supported.")

    chunks = []
    for line in (code or "").splitlines():
        if _is_comment(line):
            continue
        text = _simulate_line(track, line)
        if text is not None:
            chunks.append(text)

    output = "".join(chunks)
    if not output:
        return SimulationResult(error="No output statements found.")
    return SimulationResult(lines=output.rstrip("\n").split("\n"))


SQL_TIME_LIMIT = 5          # seconds
SQL_MAX_ROWS = 500
_PROGRESS_STEPS = 10000     # VM instructions between deadline checks


def run_sql(query: str) -> SimulationResult:
    """Execute a query against a fresh copy of the sample database."""
    if not isinstance(query, str):
        return SimulationResult(error="SQL Error: query must be text")

    conn = sqlite3.connect(":memory:")
    deadline = time.monotonic() + SQL_TIME_LIMIT
    timed_out = []

    def _check_deadline():
        if time.monotonic() > deadline:
            timed_out.append(True)
            return 1
        return 0

    try:
        conn.executescript(SAMPLE_SCHEMA)
        conn.set_progress_handler(_check_deadline, _PROGRESS_STEPS)
        cur = conn.execute(query)
        columns = [d[0] for d in cur.description] if cur.description else []
        rows = [list(r) for r in cur.fetchmany(SQL_MAX_ROWS)]
    except (sqlite3.Error, sqlite3.Warning) as exc:
        if timed_out:
            return SimulationResult(error=f"SQL Error: query timed out ({SQL_TIME_LIMIT}s limit)")
        return SimulationResult(error=f"SQL Error: {exc}")
    finally:
        conn.close()

    lines = []
    if columns:
        lines.append(" | ".join(columns))
    lines.extend(" | ".join(str(v) for v in row) for row in rows)
    return SimulationResult(lines=lines, columns=columns, rows=rows)


def check_output(lines: List[str], expected: str) -> bool:
    """Compare simulated output with a test case's expected output, ignoring trailing whitespace."""
    def norm(text_lines):
        cleaned = [line.rstrip() for line in text_lines]
        while cleaned and not cleaned[-1]:
            cleaned.pop()
        return cleaned

    return bool(lines) and norm(lines) == norm((expected or "").split("\n"))
