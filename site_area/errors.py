"""Error hierarchy for site-area computations."""


class SiteAreaError(Exception):
    """Base error for site-area operations."""


class GeometryError(SiteAreaError):
    """A geometric operation (union, intersection, measurement) failed.

    Attributes:
        operation: Name of the failed operation
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")
