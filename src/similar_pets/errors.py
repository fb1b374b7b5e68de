
class SimilarPetsError(Exception):
    """Base class for errors raised by the similar pets engine."""
    pass


class PetNotFoundError(SimilarPetsError, LookupError):
    """Raised when the source pet id does not resolve in the data provider."""

    def __init__(self, pet_id: str):
        super().__init__(f"Pet not found: {pet_id}")
        self.pet_id = pet_id


class InvalidArgumentError(SimilarPetsError, ValueError):
    """Raised when a caller breaks the engine's input contract."""
    pass


class InvalidProfileError(InvalidArgumentError):
    """Raised when an attribute profile is malformed at construction time."""
    pass
