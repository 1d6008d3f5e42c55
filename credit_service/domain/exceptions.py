"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Caller input or account state rejected the operation"""

    pass


class MissingCustomerType(ValidationError):
    """Credit account has no customer type"""

    pass


class UnsupportedCustomerType(ValidationError):
    """No strategy is registered for the customer type"""

    pass


class UnsupportedCreditType(ValidationError):
    """Strategy does not handle this kind of credit"""

    pass


class InvalidSegment(ValidationError):
    """Credit account was routed to a strategy for another customer segment"""

    pass


class DuplicateActiveCredit(ValidationError):
    """Personal customer already holds a simple credit"""

    pass


class CreditNotFound(ValidationError):
    """Credit account does not exist"""

    pass


class UnsupportedAccountType(ValidationError):
    """No transaction validator is registered for the credit type"""

    pass


class InvalidBalance(ValidationError):
    """Account balance field lies outside [0, amount]"""

    pass


class CreditTypeChange(ValidationError):
    """Update tried to turn an account into another credit type"""

    pass


class InvalidTransactionType(ValidationError):
    """Transaction type is not allowed for the credit account"""

    pass


class InvalidTransactionAmount(ValidationError):
    """Transaction amount must be positive"""

    pass


class InsufficientCredit(ValidationError):
    """Spending exceeds the available credit"""

    pass


class PaymentExceedsLimit(ValidationError):
    """Payment would push available credit above the card limit"""

    pass


class PaymentExceedsTotal(ValidationError):
    """Payment would exceed the simple credit's total amount"""

    pass


class InvalidReportPeriod(ValidationError):
    """Report period starts after it ends"""

    pass


class BalanceUpdateError(ValidationError):
    """Persisting the settled balance failed"""

    pass


class StorageError(DomainException):
    """Persistence layer failed"""

    pass


class StaleBalanceError(StorageError):
    """Balance changed between read and write"""

    pass


class ReportGenerationError(DomainException):
    """Report could not be produced"""

    pass
