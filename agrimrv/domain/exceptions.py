"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AIServiceError(DomainException):
    """AI classification service returned an error or is unavailable"""

    pass


class ProfileNotFoundError(DomainException):
    """No scored credit profile exists for the requested farm profile"""

    pass


class IncompleteDeclarationError(DomainException):
    """Declaration is missing fields required before scoring"""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{key}: {msg}" for key, msg in errors.items()))
