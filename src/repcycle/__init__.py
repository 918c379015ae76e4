"""repcycle: recurring-template workout scheduler and progress engine."""

__version__ = "0.1.0"
