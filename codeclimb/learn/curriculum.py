"""
codeclimb/learn/curriculum.py
Track registry and the (track, level) -> (topic, difficulty) lookup.
"""
from __future__ import annotations
from typing import Dict, List, Any, Sequence, Tuple

# ── Track registry ────────────────────────────────────────────────────────────
# Structure:
#   key        : lower-case slug used in URLs + DB rows
#   name       : display name
#   kind       : "language" | "tool"
#   description: one-line summary shown on the dashboard card

TRACKS: List[Dict[str, Any]] = [
    {"key": "c",          "name": "C",          "kind": "language",
     "description": "Master the fundamentals of programming"},
    {"key": "cpp",        "name": "C++",        "kind": "language",
     "description": "Object-oriented programming excellence"},
    {"key": "java",       "name": "Java",       "kind": "language",
     "description": "Enterprise-grade application development"},
    {"key": "python",     "name": "Python",     "kind": "language",
     "description": "Versatile and beginner-friendly"},
    {"key": "html",       "name": "HTML",       "kind": "language",
     "description": "Structure the web with markup"},
    {"key": "css",        "name": "CSS",        "kind": "language",
     "description": "Style and design beautiful interfaces"},
    {"key": "javascript", "name": "JavaScript", "kind": "language",
     "description": "Dynamic web development"},
    {"key": "sql",        "name": "SQL",        "kind": "tool",
     "description": "Query and shape relational data"},
    {"key": "git",        "name": "Git",        "kind": "tool",
     "description": "Version control for every project"},
    {"key": "linux",      "name": "Linux",      "kind": "tool",
     "description": "Command-line fluency on Unix systems"},
    {"key": "dsa",        "name": "DSA",        "kind": "tool",
     "description": "Data structures and algorithms"},
    {"key": "rest-apis",  "name": "REST APIs",  "kind": "tool",
     "description": "Design and consume web APIs"},
    {"key": "json",       "name": "JSON",       "kind": "tool",
     "description": "The data format of the web"},
    {"key": "debugging",  "name": "Debugging",  "kind": "tool",
     "description": "Find and fix bugs systematically"},
    {"key": "regex",      "name": "Regex",      "kind": "tool",
     "description": "Pattern matching for text"},
]

TRACK_ALIASES = {
    "c++": "cpp",
    "js": "javascript",
    "rest": "rest-apis",
    "regexp": "regex",
}

_TRACKS_BY_KEY = {t["key"]: t for t in TRACKS}

# ── Topic catalogues ──────────────────────────────────────────────────────────
# Levels past the end of a catalogue wrap around (level 31 of a 30-topic
# track repeats topic 1).

_C_FAMILY_BASICS = [
    "Introduction", "Program Structure", "Variables", "Data Types",
    "Constants and Literals", "Input and Output", "Arithmetic Operators",
    "Relational and Logical Operators", "Type Casting", "If Statements",
    "If-Else and Else-If Ladders", "Switch Statements", "While Loops",
    "For Loops", "Do-While Loops", "Break and Continue", "Functions",
    "Function Parameters", "Recursion", "Arrays",
]

TOPICS: Dict[str, List[str]] = {
    "c": _C_FAMILY_BASICS + [
        "Multidimensional Arrays", "Strings", "Pointers", "Pointer Arithmetic",
        "Dynamic Memory Allocation", "Structures", "Unions and Enums",
        "File Handling", "Preprocessor Directives", "Linked Lists",
    ],
    "cpp": _C_FAMILY_BASICS + [
        "References", "Classes and Objects", "Constructors and Destructors",
        "Inheritance", "Polymorphism", "Operator Overloading", "Templates",
        "The Standard Template Library", "Exception Handling", "Smart Pointers",
    ],
    "java": [
        "Introduction to Java", "Variables and Data Types", "Operators",
        "Input with Scanner", "Conditionals", "Switch Expressions", "Loops",
        "Arrays", "Strings", "Methods", "Method Overloading", "Classes and Objects",
        "Constructors", "Encapsulation", "Inheritance", "Polymorphism",
        "Abstract Classes", "Interfaces", "Packages", "Exception Handling",
        "ArrayList", "HashMap", "Generics", "Collections Framework",
        "Lambda Expressions", "Streams API", "File I/O", "Threads",
        "Synchronization", "Records and Enums",
    ],
    "python": [
        "Introduction to Python", "Variables", "Data Types", "Operators",
        "Strings", "Input and Output", "Conditionals", "While Loops", "For Loops",
        "Lists", "Tuples", "Dictionaries", "Sets", "Functions",
        "Arguments and Return Values", "Lambda Functions", "Modules and Imports",
        "File Handling", "Exceptions", "List Comprehensions", "Classes and Objects",
        "Inheritance", "Magic Methods", "Iterators and Generators", "Decorators",
        "Context Managers", "Regular Expressions", "Virtual Environments",
        "Type Hints", "Async Programming",
    ],
    "html": [
        "Introduction to HTML", "Headings and Paragraphs", "Text Formatting",
        "Links", "Images", "Lists", "Tables", "Forms", "Input Types",
        "Semantic Elements", "Audio and Video", "Iframes", "Meta Tags",
        "Accessibility", "Document Structure",
    ],
    "css": [
        "Introduction to CSS", "Selectors", "Colors", "Units", "The Box Model",
        "Typography", "Backgrounds", "Display", "Positioning", "Flexbox",
        "Grid Layout", "Pseudo-classes", "Transitions", "Animations",
        "Media Queries", "Custom Properties", "Specificity",
    ],
    "javascript": [
        "Introduction to JavaScript", "Variables: let, const, var", "Data Types",
        "Operators", "Strings", "Conditionals", "Loops", "Functions",
        "Arrow Functions", "Arrays", "Array Methods", "Objects", "Destructuring",
        "Spread and Rest", "Scope and Closures", "The DOM", "Events",
        "Classes", "Modules", "Promises", "Async/Await", "Fetch API",
        "Error Handling", "JSON", "Local Storage", "Iterators", "Generators",
        "Maps and Sets", "Regular Expressions", "Prototypes",
    ],
    "sql": [
        "Introduction to SQL", "SELECT Queries", "Filtering with WHERE",
        "Sorting with ORDER BY", "Aggregate Functions", "GROUP BY", "HAVING",
        "INNER JOIN", "LEFT JOIN", "Subqueries", "INSERT", "UPDATE and DELETE",
        "Creating Tables", "Constraints", "Indexes", "Views", "Transactions",
        "Window Functions", "Common Table Expressions", "Normalization",
    ],
    "git": [
        "Introduction to Git", "Repositories", "Staging and Committing",
        "Viewing History", "Branches", "Merging", "Merge Conflicts", "Remotes",
        "Push and Pull", "Rebasing", "Stashing", "Tags", "Undoing Changes",
        "Ignoring Files", "Pull Requests",
    ],
    "linux": [
        "The Shell", "Navigating the Filesystem", "Working with Files",
        "Viewing File Contents", "Permissions", "Users and Groups", "Processes",
        "Pipes and Redirection", "grep", "find", "Package Management",
        "Environment Variables", "Shell Scripting", "Cron Jobs", "SSH",
    ],
    "dsa": [
        "Big-O Notation", "Arrays", "Linked Lists", "Stacks", "Queues",
        "Hash Tables", "Recursion", "Binary Search", "Sorting Algorithms",
        "Trees", "Binary Search Trees", "Heaps", "Graphs", "Breadth-First Search",
        "Depth-First Search", "Dynamic Programming", "Greedy Algorithms",
        "Tries", "Shortest Paths", "Union-Find",
    ],
    "rest-apis": [
        "What is an API", "HTTP Methods", "Status Codes", "URLs and Resources",
        "Request and Response Headers", "JSON Payloads", "Query Parameters",
        "Authentication", "Pagination", "Versioning", "Error Responses",
        "Rate Limiting", "Idempotency", "Caching", "API Documentation",
    ],
    "json": [
        "Introduction to JSON", "JSON Syntax", "Data Types", "Objects",
        "Arrays", "Nesting", "Parsing JSON", "Serializing JSON", "JSON Schema",
        "Common Pitfalls",
    ],
    "debugging": [
        "The Debugging Mindset", "Reading Error Messages", "Print Debugging",
        "Using a Debugger", "Breakpoints", "Stack Traces", "Logging",
        "Reproducing Bugs", "Bisecting", "Unit Tests for Bugs",
    ],
    "regex": [
        "Introduction to Regex", "Literal Characters", "Character Classes",
        "Quantifiers", "Anchors", "Groups", "Alternation", "Escaping",
        "Lookahead and Lookbehind", "Backreferences", "Flags", "Greedy vs Lazy",
    ],
}

GENERIC_TOPICS = [
    "Getting Started", "Core Concepts", "Syntax Essentials", "Control Flow",
    "Working with Data", "Functions and Reuse", "Error Handling",
    "Best Practices", "Real-World Patterns", "Putting It Together",
]

DEFAULT_DIFFICULTY_TIERS: Sequence[Tuple[int, str]] = ((10, "Beginner"), (20, "Intermediate"))
TOP_DIFFICULTY = "Advanced"


def normalize_track(track: str) -> str:
    key = (track or "").strip().lower()
    return TRACK_ALIASES.get(key, key)


def is_known_track(track: str) -> bool:
    return normalize_track(track) in _TRACKS_BY_KEY


def get_track(track: str) -> Dict[str, Any] | None:
    return _TRACKS_BY_KEY.get(normalize_track(track))


def list_tracks() -> List[Dict[str, Any]]:
    return list(TRACKS)


def is_tool_track(track: str) -> bool:
    meta = get_track(track)
    return bool(meta and meta["kind"] == "tool")


def get_topic(track: str, level: int) -> str:
    """Topic for a level; wraps around the catalogue for any level >= 1."""
    topics = TOPICS.get(normalize_track(track), GENERIC_TOPICS)
    return topics[(max(int(level), 1) - 1) % len(topics)]


def get_difficulty(level: int, tiers: Sequence[Tuple[int, str]] | None = None) -> str:
    for upper, label in (tiers or DEFAULT_DIFFICULTY_TIERS):
        if level <= upper:
            return label
    return TOP_DIFFICULTY


def get_title(track: str, level: int) -> str:
    return f"Level {level} – {get_topic(track, level)}"
