from pydantic import BaseModel

from simple_utilities.utils.serialisation import pascal_case_to_snake_case, remove_suffix


class Event(BaseModel):
    """
    Base class for typed events.
    Events are data containers that describe something that happened.
    """
    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def get_event_name(cls) -> str:
        """Get the event type for identification purposes."""
        name = pascal_case_to_snake_case(cls.__name__)
        return remove_suffix(name, "_event")
