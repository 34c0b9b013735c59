"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ConfigurationError(DomainException):
    """Unit roster or obligation registry is malformed"""

    pass


class InvalidTransactionDataError(DomainException):
    """Ledger row is malformed and cannot be ingested"""

    pass


class LedgerUnavailableError(DomainException):
    """Transaction ledger could not be read"""

    pass
