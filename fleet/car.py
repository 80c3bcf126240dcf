"""Car class for vehicle identification."""


class Car:
    """Vehicle identification as listed in the maintenance schedule."""

    def __init__(
        self,
        plate: str,
        city: str = "",
        model: str = "",
        year: int = 0,
    ):
        self.plate = plate
        self.city = city
        self.model = model
        self.year = year or 0

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        base = f"{self.plate} {self.model}".strip()
        return f"{base} ({self.year})" if self.year else base

    def __repr__(self) -> str:
        return f"Car({self.plate!r}, city={self.city!r}, model={self.model!r}, year={self.year})"
