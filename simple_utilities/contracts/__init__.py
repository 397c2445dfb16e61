"""Contract classes and abstract interfaces.

These are the building blocks used across the library and are exported so
they can be imported directly from :mod:`simple_utilities`.
"""

from .event import Event
from .event_listener import EventListener
from .validator_rule import ValidatorRule

__all__ = [
    "Event",
    "EventListener",
    "ValidatorRule",
]
