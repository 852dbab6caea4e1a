"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidConfigurationError(DomainException):
    """Engine settings are malformed (e.g. alpha outside (0, 1), min cycle > max cycle)"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or invalid"""

    pass
