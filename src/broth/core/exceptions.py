"""Exceptions raised by the core engine."""


class InvalidDimension(ValueError):
    """Raised when a grid is constructed with a non-positive width or height."""

    def __init__(self, axis: str, value: object) -> None:
        self.axis = axis
        self.value = value
        super().__init__(f"{axis} must be a positive integer, got {value!r}")
