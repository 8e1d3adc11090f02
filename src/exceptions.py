class TourBackendError(Exception):
    """Base class for errors raised by the service layer"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TourBackendError):
    """A referenced package, booking or admin does not exist"""


class InvalidInputError(TourBackendError):
    """A required field is missing or malformed"""


class MissingPriceError(InvalidInputError):
    def __init__(self, message: str = "priceNU or priceCents required"):
        super().__init__(message)


class ConflictError(TourBackendError):
    """A uniqueness constraint would be violated"""


class AuthenticationError(TourBackendError):
    """Credentials were missing or did not match"""


class AccountLockedError(AuthenticationError):
    def __init__(self, message: str = "Account locked. Try again later."):
        super().__init__(message)


class AccountDisabledError(AuthenticationError):
    def __init__(self, message: str = "Account disabled"):
        super().__init__(message)
