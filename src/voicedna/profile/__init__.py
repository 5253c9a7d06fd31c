"""Profile merging, scoring and rules."""
