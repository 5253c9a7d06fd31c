"""Exceptions raised by Voice DNA."""

from __future__ import annotations


class VoiceDNAError(Exception):
    """Base class for Voice DNA errors."""


class ProfileNotFoundError(VoiceDNAError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"No voice profile for user: {user_id}")
        self.user_id = user_id


class SampleNotFoundError(VoiceDNAError):
    def __init__(self, sample_id: str) -> None:
        super().__init__(f"Writing sample not found: {sample_id}")
        self.sample_id = sample_id


class CalibrationRoundError(VoiceDNAError, ValueError):
    """Invalid calibration round submission (bad rating or round number)."""
