class DataException(ValueError):
    pass

class MissingAttributeException(DataException):
    def __init__(self, attribute: str, data_class: str):
        self.attribute = attribute
        super().__init__(f"Missing required attribute: '{attribute}' in {data_class}.from_dict() method.")

class InvalidAttributeTypeException(DataException):
    def __init__(self, attribute: str, data_class: str, reason: str):
        self.attribute = attribute
        super().__init__(f"Invalid value for '{attribute}' in {data_class}.from_dict() method: {reason}")

class ImmutableAttributeException(DataException):
    def __init__(self, attribute: str, data_class: str):
        self.attribute = attribute
        super().__init__(f"Cannot unset property '{attribute}' in {data_class}. Properties in Data objects are immutable.")
