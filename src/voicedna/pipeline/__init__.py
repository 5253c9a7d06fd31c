"""Profile update orchestration and persistence."""
