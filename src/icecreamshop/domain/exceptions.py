"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Each family carries the HTTP status an outer web layer should answer with,
so the mapping lives next to the error kinds instead of in every handler.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 500


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    status_code = 400


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404


class ConflictError(DomainException):
    """The request clashes with existing reference data."""

    status_code = 400


class UnsupportedOperationError(DomainException):
    """The request asks for something the system does not offer."""

    status_code = 400


class ExternalServiceError(DomainException):
    """A collaborator outside the process failed."""

    status_code = 502


# --- Not found ----------------------------------------------------------------


class OrderNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "No order found with this ID.") -> None:
        super().__init__(message)


class UserNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "No user found with this ID.") -> None:
        super().__init__(message)


class DriverNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "No delivery driver found with this ID.") -> None:
        super().__init__(message)


class TubNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "No ice cream tub found with this ID.") -> None:
        super().__init__(message)


class FlavorNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "No flavor found with this ID.") -> None:
        super().__init__(message)


class UnknownFlavorError(EntityNotFoundError):
    def __init__(self, message: str = "One or more flavor do not exist.") -> None:
        super().__init__(message)


# --- Tub / order validation ---------------------------------------------------


class ZeroWeightError(ValidationError):
    def __init__(self, message: str = "Weight must be a positive number.") -> None:
        super().__init__(message)


class InvalidFlavorCountError(ValidationError):
    def __init__(self, message: str = "Flavors cannot be 0 or greater than 4.") -> None:
        super().__init__(message)


class OrderAlreadyPaidError(ValidationError):
    def __init__(self, message: str = "Order is already paid.") -> None:
        super().__init__(message)


# --- Conflicts ----------------------------------------------------------------


class UnsupportedWeightError(ConflictError):
    def __init__(self, message: str = "Weight not available.") -> None:
        super().__init__(message)


class DuplicateFlavorError(ConflictError):
    def __init__(self, message: str = "This flavor ID already exists.") -> None:
        super().__init__(message)


class DuplicateEmailError(ConflictError):
    def __init__(self, message: str = "Email already exists.") -> None:
        super().__init__(message)


class AlreadyDriverError(ConflictError):
    def __init__(self, message: str = "User is already a delivery driver.") -> None:
        super().__init__(message)


class OrderChangedDuringPaymentError(ConflictError):
    def __init__(
        self, message: str = "Order changed while the payment was processed. Please pay again."
    ) -> None:
        super().__init__(message)


# --- Payments -----------------------------------------------------------------


class UnsupportedPaymentTypeError(UnsupportedOperationError):
    def __init__(self, message: str = "Unsupported payment type.") -> None:
        super().__init__(message)


class InvalidPaymentDataError(ValidationError):
    def __init__(self, message: str = "Invalid payment data.") -> None:
        super().__init__(message)


class InvalidAmountError(ValidationError):
    def __init__(self, message: str = "The amount must be a positive number.") -> None:
        super().__init__(message)


class InvalidCardNumberError(ValidationError):
    def __init__(self, message: str = "Credit card must have 16 digits.") -> None:
        super().__init__(message)


class MissingCardHolderError(ValidationError):
    def __init__(self, message: str = "Credit card holder name is required.") -> None:
        super().__init__(message)


class InvalidExpirationMonthError(ValidationError):
    def __init__(self, message: str = "Invalid expiration month.") -> None:
        super().__init__(message)


class InvalidExpirationYearError(ValidationError):
    def __init__(self, message: str = "Invalid expiration year.") -> None:
        super().__init__(message)


class InvalidCVVError(ValidationError):
    def __init__(self, message: str = "Invalid CVV.") -> None:
        super().__init__(message)


class MissingWalletIdError(ValidationError):
    def __init__(self, message: str = "Wallet id is required.") -> None:
        super().__init__(message)


class CheckoutGatewayError(ExternalServiceError):
    """The hosted checkout provider rejected or failed the request.

    The provider's own message is kept verbatim.
    """
