"""Voice DNA — per-user voice profile analysis and calibration."""

__version__ = "0.1.0"
