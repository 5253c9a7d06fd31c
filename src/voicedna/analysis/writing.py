"""Writing sample analysis — heuristic pattern extraction, no LLM."""

from __future__ import annotations

import math
import re
from collections import Counter

from voicedna.models.profile import (
    ClosingStyle,
    OpeningStyle,
    SentenceLength,
    StructurePreference,
    WrittenPatterns,
)
from voicedna.models.writing import ExtractedWritingPatterns

MAX_KEY_PHRASES = 10
MAX_MERGED_KEY_PHRASES = 15
SHORT_PARAGRAPH_WORDS = 50
LONG_PARAGRAPH_WORDS = 150
FORMALITY_STEP = 0.15

# (tone, substrings matched against the lower-cased text)
TONE_MARKERS: list[tuple[str, tuple[str, ...]]] = [
    ("conversational", ("you", "we", "let's")),
    ("formal", ("therefore", "furthermore", "consequently")),
    ("enthusiastic", ("!", "amazing", "exciting")),
    ("authoritative", ("research shows", "studies indicate", "evidence suggests")),
    ("narrative", ("once upon", "i remember", "last year", "one day")),
    ("structured", ("first", "second", "finally", "in conclusion")),
    ("empathetic", ("i understand", "i know how", "we've all been")),
    ("humorous", (";)", ":)", "joke", "funny")),
]

PHRASE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^(let me|here's|the thing is|think about)", re.I | re.M), "direct opening"),
    (re.compile(r"^(have you ever|what if|imagine)", re.I | re.M), "question opening"),
    (re.compile(r"^(i was|last week|one time)", re.I | re.M), "story opening"),
    (re.compile(r"first[,.]|second[,.]|third[,.]", re.I), "numbered structure"),
    (re.compile(r"on the other hand|however|but here's", re.I), "contrast usage"),
    (re.compile(r"for example|for instance|consider this", re.I), "examples usage"),
    (re.compile(r"(so what|what now|the takeaway)", re.I), "action closing"),
    (re.compile(r"(to summarize|in short|bottom line)", re.I), "summary closing"),
    (re.compile(r"\?$", re.M), "question closing"),
]

FORMAL_TONES = {"formal", "authoritative"}
CASUAL_TONES = {"conversational", "humorous"}


def vocabulary_complexity(text: str) -> float:
    words = re.findall(r"\b[a-z]+\b", text.lower())
    if not words:
        return 0.5

    avg_length = sum(len(w) for w in words) / len(words)
    variety = len(set(words)) / len(words)
    complex_ratio = sum(1 for w in words if len(w) > 8) / len(words)

    score = min(avg_length / 8, 1.0) * 0.3 + variety * 0.4 + complex_ratio * 0.3
    return max(0.0, min(score, 1.0))


def sentence_variation(text: str) -> float:
    """Normalized standard deviation of sentence lengths (in words)."""
    sentences = [s for s in re.split(r"[.!?]+", text) if s.strip()]
    if len(sentences) < 2:
        return 0.5

    lengths = [len(s.split()) for s in sentences]
    mean = sum(lengths) / len(lengths)
    variance = sum((n - mean) ** 2 for n in lengths) / len(lengths)
    return min(math.sqrt(variance) / 15, 1.0)


def paragraph_structure(text: str) -> SentenceLength:
    paragraphs = [p for p in re.split(r"\n\s*\n", text) if p.strip()]
    if not paragraphs:
        return "medium"

    avg_words = sum(len(p.split()) for p in paragraphs) / len(paragraphs)
    if avg_words < SHORT_PARAGRAPH_WORDS:
        return "short"
    if avg_words > LONG_PARAGRAPH_WORDS:
        return "long"
    return "medium"


def tone_indicators(text: str) -> list[str]:
    lower = text.lower()
    found = [tone for tone, markers in TONE_MARKERS if any(m in lower for m in markers)]
    return found or ["neutral"]


def key_phrases(text: str) -> list[str]:
    phrases = [label for pattern, label in PHRASE_PATTERNS if pattern.search(text)]

    # Repeated 3-word sequences
    words = text.lower().split()
    grams: Counter[str] = Counter()
    for i in range(len(words) - 2):
        gram = f"{words[i]} {words[i + 1]} {words[i + 2]}"
        if len(gram) > 10:
            grams[gram] += 1
    phrases.extend(f'repeats: "{gram}"' for gram, count in grams.items() if count >= 2)

    return phrases[:MAX_KEY_PHRASES]


def extract_writing_patterns(text: str) -> ExtractedWritingPatterns:
    """Extract writing patterns from a single sample."""
    cleaned = re.sub(r"\s+", " ", text).strip()
    return ExtractedWritingPatterns(
        vocabulary_complexity=vocabulary_complexity(cleaned),
        sentence_variation=sentence_variation(cleaned),
        # paragraph breaks only survive in the raw text
        paragraph_structure=paragraph_structure(text),
        tone_indicators=tone_indicators(cleaned),
        key_phrases=key_phrases(cleaned),
    )


def _ordered_union(items: list[list[str]]) -> list[str]:
    return list(dict.fromkeys(x for group in items for x in group))


def merge_writing_patterns(
    patterns: list[ExtractedWritingPatterns],
) -> ExtractedWritingPatterns:
    """Combine every sample's patterns into one (averages, mode, unions)."""
    if not patterns:
        return ExtractedWritingPatterns(tone_indicators=[], key_phrases=[])
    if len(patterns) == 1:
        return patterns[0]

    counts = Counter(p.paragraph_structure for p in patterns)
    # ties resolve in short/medium/long order
    structure = max(("short", "medium", "long"), key=lambda s: counts[s])

    return ExtractedWritingPatterns(
        vocabulary_complexity=sum(p.vocabulary_complexity for p in patterns) / len(patterns),
        sentence_variation=sum(p.sentence_variation for p in patterns) / len(patterns),
        paragraph_structure=structure,
        tone_indicators=_ordered_union([p.tone_indicators for p in patterns]),
        key_phrases=_ordered_union([p.key_phrases for p in patterns])[:MAX_MERGED_KEY_PHRASES],
    )


def to_written_patterns(extracted: ExtractedWritingPatterns) -> WrittenPatterns:
    """Map extracted sample patterns onto the profile's written patterns."""
    tones = set(extracted.tone_indicators)
    phrases = set(extracted.key_phrases)

    formality = extracted.vocabulary_complexity
    formality += FORMALITY_STEP * len(tones & FORMAL_TONES)
    formality -= FORMALITY_STEP * len(tones & CASUAL_TONES)

    structure: StructurePreference = "linear"
    if "numbered structure" in phrases:
        structure = "modular"
    elif "narrative" in tones or "story opening" in phrases:
        structure = "narrative"

    opening: OpeningStyle = "context"
    if "question opening" in phrases:
        opening = "question"
    elif "story opening" in phrases:
        opening = "story"
    elif "direct opening" in phrases:
        opening = "hook"

    closing: ClosingStyle = "summary"
    if "action closing" in phrases:
        closing = "cta"
    elif "question closing" in phrases:
        closing = "question"
    elif "summary closing" not in phrases and "narrative" in tones:
        closing = "reflection"

    return WrittenPatterns(
        structure_preference=structure,
        formality=max(0.0, min(formality, 1.0)),
        paragraph_length=extracted.paragraph_structure,
        opening_style=opening,
        closing_style=closing,
    )


def derive_written_patterns(
    patterns: list[ExtractedWritingPatterns],
) -> WrittenPatterns | None:
    """Written patterns from all analyzed samples, or None when there are none."""
    if not patterns:
        return None
    return to_written_patterns(merge_writing_patterns(patterns))
