"""
Domain layer for the workout tracker.

Pure models, rules and the clock abstraction, independent of the database
and the web framework.
"""

from domain.clock import Clock, FixedClock, SystemClock
from domain.exceptions import BusinessRuleError

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "BusinessRuleError",
]
