"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Numeric or action input rejected at the engine boundary"""

    pass


class NotOnboardedError(DomainException):
    """No budgeting period has been initialized yet"""

    pass
