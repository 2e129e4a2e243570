"""intellinlp - rule-based conversational response engine."""

__version__ = "0.1.0"
