from .datetime_utils import now

__all__ = [
    "now",
]
