class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed or a required field is missing."""


class DuplicateOperation(DomainError):
    """Raised when an operation was already performed (punch, payroll period)."""


class DuplicatePending(DuplicateOperation):
    """A pending payroll record already exists for the employee and period."""


class AlreadyPaid(DuplicateOperation):
    """A paid payroll record already exists for the employee and period."""


class NotFound(DomainError):
    """Raised when a record the operation depends on does not exist."""


class AccountNotLinked(NotFound):
    """The employee has no linked system account."""


class PolicyViolation(DomainError):
    """Raised when an operation would break a business policy."""


class StoreError(Exception):
    """Opaque failure of the underlying store (connection, query, driver)."""
