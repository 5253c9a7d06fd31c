"""Transcript and writing-sample analysis."""
