"""lesson-adapt: explainable, deterministic lesson-style adaptation."""

__version__ = "1.3.0"
