"""Linguistic analysis of transcripts via Claude API (optional).

The analyst is an external collaborator: its output is parsed leniently and
always passed through ``sanitize_analysis``. Without an API key, without
the ``anthropic`` package, or on any API failure, analysis degrades to the
neutral default rather than aborting the session.
"""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from typing import Any, Protocol

from voicedna.analysis.sanitize import default_analysis, sanitize_analysis
from voicedna.models.config import AnalysisConfig
from voicedna.models.profile import LinguisticAnalysis, SentenceLength
from voicedna.utils.progress import log_step, log_warning
from voicedna.utils.retry import TRANSIENT_ERRORS, retry_api

ANALYSIS_PROMPT = """You are a linguistic analyst specializing in voice pattern \
extraction. Analyze the following transcript to extract the speaker's unique \
linguistic patterns.

TRANSCRIPT:
\"\"\"
{transcript}
\"\"\"

Return a JSON object with exactly this structure:
{{
  "spoken_patterns": {{
    "vocabulary": {{
      "frequent_words": [5-10 distinctive words they use often],
      "unique_phrases": [3-5 unique phrases or expressions],
      "filler_words": [filler words like "um", "like", "you know"],
      "preserve_fillers": true if fillers add authenticity to their style
    }},
    "rhythm": {{
      "avg_sentence_length": "short" | "medium" | "long",
      "pace_variation": "consistent" | "varied" | "dynamic",
      "pause_patterns": "frequent" | "moderate" | "rare"
    }},
    "rhetoric": {{
      "uses_questions": true if they ask rhetorical questions,
      "uses_analogies": true if they use comparisons or analogies,
      "storytelling_style": "anecdotal" | "hypothetical" | "personal" | "mixed"
    }},
    "enthusiasm": {{
      "topics_that_excite": [topics they seem passionate about],
      "emphasis_patterns": [phrases they use to emphasize points],
      "energy_baseline": 0.0-1.0
    }}
  }},
  "tonal_attributes": {{
    "warmth": 0.0-1.0,
    "authority": 0.0-1.0,
    "humor": 0.0-1.0,
    "directness": 0.0-1.0,
    "empathy": 0.0-1.0
  }},
  "suggested_topics": [3-5 topics they seem most knowledgeable about]
}}

Base all analysis on actual patterns in the transcript. Use decimals for \
numbers (0.7, not 70). frequent_words must exclude common words (the, a, is).

Return ONLY the JSON object, no markdown formatting."""

COMMON_FILLERS = [
    "um",
    "uh",
    "like",
    "you know",
    "basically",
    "actually",
    "literally",
    "sort of",
    "kind of",
    "i mean",
    "right",
    "so",
    "well",
    "anyway",
    "honestly",
]

QUESTION_PATTERNS = [
    re.compile(r"\?[^.!?]*\."),  # question followed by a statement
    re.compile(r"(?:right|isn't it|don't you think|wouldn't you|you know)\?", re.IGNORECASE),
    re.compile(r"(?:what if|how can we|why do we)\s+[^?]*\?", re.IGNORECASE),
]


class LinguisticAnalyst(Protocol):
    """Anything that turns text into a raw (untrusted) analysis payload."""

    def analyze(self, text: str) -> Mapping | None: ...


class AnthropicAnalyst:
    """Linguistic analyst backed by the Anthropic Messages API."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        *,
        api_key: str | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")

    def analyze(self, text: str) -> Mapping | None:
        if not self.api_key:
            log_warning(
                "ANTHROPIC_API_KEY not set — skipping linguistic analysis. "
                "Profile will be updated with neutral defaults."
            )
            return None

        try:
            import anthropic
        except ImportError:
            log_warning(
                "anthropic package not installed — skipping linguistic analysis. "
                "Install with: pip install voicedna[llm]"
            )
            return None

        client = anthropic.Anthropic(api_key=self.api_key)
        retry_on = TRANSIENT_ERRORS + (
            anthropic.APIConnectionError,
            anthropic.RateLimitError,
        )

        @retry_api(self.config.llm_max_attempts, retry_on=retry_on)
        def _create():
            return client.messages.create(
                model=self.config.llm_model,
                max_tokens=self.config.llm_max_tokens,
                temperature=self.config.llm_temperature,
                messages=[{
                    "role": "user",
                    "content": ANALYSIS_PROMPT.format(transcript=text),
                }],
            )

        log_step("Linguistic", f"Sending {len(text)} chars to Claude ({self.config.llm_model})")
        try:
            message = _create()
        except Exception as e:
            log_warning(f"Claude API error: {e}. Falling back to neutral analysis.")
            return None

        reply = response_text(message)
        if reply is None:
            log_warning("Claude returned no text content. Falling back to neutral analysis.")
            return None
        return parse_llm_response(reply)


def response_text(message: Any) -> str | None:
    """Text of the first text block in a Messages API response."""
    for block in getattr(message, "content", None) or ():
        text = getattr(block, "text", None)
        if isinstance(text, str):
            return text
    return None


def parse_llm_response(text: str) -> dict | None:
    """Parse a JSON object out of an LLM response, tolerating fences and prose."""
    text = text.strip()
    if text.startswith("```"):
        lines = [l for l in text.split("\n") if not l.strip().startswith("```")]
        text = "\n".join(lines)

    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            log_warning("Failed to find JSON in analyst response")
            return None
        try:
            result = json.loads(match.group())
        except json.JSONDecodeError:
            log_warning("Failed to parse analyst response as JSON")
            return None

    return result if isinstance(result, dict) else None


def analyze_linguistics(
    text: str,
    analyst: LinguisticAnalyst | None,
    *,
    min_chars: int = 50,
) -> LinguisticAnalysis:
    """Run the analyst on ``text`` and sanitize the result.

    Short texts and missing analysts yield the neutral default analysis.
    """
    if analyst is None or not text or len(text.strip()) < min_chars:
        return default_analysis()

    raw = analyst.analyze(text)
    if raw is None:
        return default_analysis()
    return sanitize_analysis(raw)


def analyze_vocabulary_basic(transcript: str) -> dict:
    """Word and sentence statistics without an LLM."""
    words = re.findall(r"\b\w+\b", transcript.lower())
    sentences = [s for s in re.split(r"[.!?]+", transcript) if s.strip()]

    avg_word_length = sum(len(w) for w in words) / len(words) if words else 0.0
    words_per_sentence = len(words) / len(sentences) if sentences else 0.0

    avg_sentence_length: SentenceLength = "medium"
    if words_per_sentence < 10:
        avg_sentence_length = "short"
    elif words_per_sentence > 20:
        avg_sentence_length = "long"

    return {
        "word_count": len(words),
        "unique_word_count": len(set(words)),
        "avg_word_length": avg_word_length,
        "sentence_count": len(sentences),
        "avg_sentence_length": avg_sentence_length,
    }


def extract_filler_words(transcript: str) -> list[str]:
    """Fillers used at least twice in the transcript."""
    lower = transcript.lower()
    found = []
    for filler in COMMON_FILLERS:
        if len(re.findall(rf"\b{re.escape(filler)}\b", lower)) >= 2:
            found.append(filler)
    return found


def detect_rhetorical_questions(transcript: str) -> bool:
    return any(p.search(transcript) for p in QUESTION_PATTERNS)
