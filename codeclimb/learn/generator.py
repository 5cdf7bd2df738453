import json

from flask import current_app
from groq import Groq

from codeclimb.learn.curriculum import is_tool_track, get_track
from codeclimb.learn.schema import ContentError, parse_level_content, SOURCE_GENERATED


class GenerationError(RuntimeError):
    """Any failure to obtain usable content from the language model."""


SYSTEM_PROMPT = (
    "You are a programming education content creator. Return ONLY valid JSON "
    "with no markdown formatting, no code fences, no extra text."
)


def build_prompt(track: str, level: int, topic: str, difficulty: str, max_level: int = 30) -> str:
    meta = get_track(track)
    name = meta["name"] if meta else track.upper()

    if is_tool_track(track):
        flavour = (f"This is a tools/technology track, not a programming language. "
                   f"Tailor examples to real-world usage of {name}.")
    else:
        flavour = (f"This is a programming language track. "
                   f"Include actual {name} code in syntax and examples.")

    return f"""Generate a complete learning level for the topic "{topic}" in {name}.
Difficulty: {difficulty} (Level {level} of {max_level}).

{flavour}

Return a JSON object with this EXACT structure:
{{
  "theory": {{
    "content": "2-4 paragraph explanation of {topic}. Be specific, accurate, educational. No generic filler.",
    "syntax": "The actual syntax/command format for {topic}. Real syntax only, no placeholders.",
    "codeExample": "A complete, working example demonstrating {topic}. Must be real, runnable code."
  }},
  "quiz": [
    {{
      "question": "A specific question testing understanding of {topic}",
      "options": ["option A", "option B", "option C", "option D"],
      "correctAnswer": "the correct option (must exactly match one of the options)"
    }}
  ],
  "codingChallenge": {{
    "problem": "A clear practical task related to {topic}",
    "tasks": ["Step 1", "Step 2", "Step 3"],
    "constraints": ["Any constraints"],
    "testCases": [
      {{"input": "sample input or None", "output": "expected output"}}
    ],
    "hints": ["Hint 1", "Hint 2"]
  }}
}}

RULES:
- Include exactly 3 quiz questions, each with exactly 4 options.
- ALL content must be SPECIFIC to "{topic}" only. Do NOT include content from other topics.
- Correct answers must EXACTLY match one of the four options.
- Code examples must be real, correct {name} code.
- Do NOT include solution code in the coding challenge, only the problem, tasks, hints, and test cases.
- Return ONLY the JSON object, no other text."""


def _strip_fences(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
        if raw.rstrip().endswith("```"):
            raw = raw.rstrip()[:-3]
    return raw.strip()


def generate_level_content(track: str, level: int, topic: str, difficulty: str) -> dict:
    """
    Ask Groq for one level's content and return the validated wire-format dict.
    Raises GenerationError on a missing key, an API error, bad JSON or a
    payload that does not match the level schema.
    """
    api_key = current_app.config.get("GROQ_API_KEY")
    if not api_key:
        raise GenerationError("GROQ_API_KEY not configured.")

    prompt = build_prompt(track, level, topic, difficulty,
                          current_app.config.get("MAX_LEVEL", 30))
    try:
        client = Groq(api_key=api_key)
        response = client.chat.completions.create(
            model=current_app.config.get("GROQ_MODEL", "llama-3.3-70b-versatile"),
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user",   "content": prompt},
            ],
            temperature=current_app.config.get("GROQ_TEMPERATURE", 0.7),
            max_tokens=current_app.config.get("GROQ_MAX_TOKENS", 4000),
        )
        raw = response.choices[0].message.content or ""
    except Exception as exc:
        raise GenerationError(f"Groq request failed: {exc}") from exc

    try:
        data = json.loads(_strip_fences(raw))
    except json.JSONDecodeError as exc:
        raise GenerationError("Failed to parse AI response as JSON") from exc

    # validate against the same parser the resolver uses
    try:
        parse_level_content(data, title="", topic=topic, difficulty=difficulty,
                            source=SOURCE_GENERATED)
    except ContentError as exc:
        raise GenerationError(f"Invalid content structure from AI: {exc}") from exc

    return data
