"""Human-readable profile summary."""

from __future__ import annotations

from voicedna.models.profile import VoiceProfile
from voicedna.profile.scoring import calibration_level

MAX_ITEMS = 5


def summarize_profile(profile: VoiceProfile) -> dict:
    """Strengths, characteristics and calibration level for display."""
    strengths: list[str] = []
    characteristics: list[str] = []

    sp = profile.spoken_patterns
    if sp is not None:
        if sp.rhetoric.uses_questions:
            strengths.append("Engages with questions")
        if sp.rhetoric.uses_analogies:
            strengths.append("Uses analogies effectively")

        if sp.rhetoric.storytelling_style == "anecdotal":
            characteristics.append("Anecdotal storyteller")
        elif sp.rhetoric.storytelling_style == "personal":
            characteristics.append("Personal narratives")

        if sp.rhythm.pace_variation == "dynamic":
            characteristics.append("Dynamic pacing")

        if sp.enthusiasm.topics_that_excite:
            topics = ", ".join(sp.enthusiasm.topics_that_excite[:2])
            characteristics.append(f"Passionate about: {topics}")

    ta = profile.tonal_attributes
    if ta is not None:
        if ta.warmth > 0.7:
            strengths.append("Warm & approachable")
        if ta.authority > 0.7:
            strengths.append("Confident & authoritative")
        if ta.humor > 0.6:
            strengths.append("Good sense of humor")
        if ta.directness > 0.7:
            strengths.append("Clear & direct")
        if ta.empathy > 0.7:
            strengths.append("Empathetic")

    return {
        "strengths": strengths[:MAX_ITEMS],
        "characteristics": characteristics[:MAX_ITEMS],
        "calibration_level": calibration_level(profile.calibration_score),
    }
