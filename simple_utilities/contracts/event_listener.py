from abc import ABC, abstractmethod
from typing import Any


class EventListener(ABC):
    """
    Base class for class-based event listeners.
    The dispatcher instantiates the class and calls `handle` with the payload.
    """

    @abstractmethod
    def handle(self, payload: Any) -> None:
        """
        Handle the event. This method must be implemented by subclasses.
        """
        pass
