"""Red-flag safety and urgency classification for symptom triage."""

__version__ = "0.1.0"
