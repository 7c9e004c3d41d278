"""Domain errors raised by the journal services."""


class JournalError(Exception):
    """Base class for journal errors."""


class TradeValidationError(JournalError):
    """A trade submission was rejected. `field` names the offending input."""

    def __init__(self, field: str | None, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class MissingFieldError(TradeValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"Missing required field: {field}")


class InvalidNumberError(TradeValidationError):
    def __init__(self, field: str, reason: str = "must be a finite number"):
        super().__init__(field, f"Invalid number for {field}: {reason}")


class InvalidDateError(TradeValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"Invalid date for {field}: expected an ISO-8601 timestamp")


class InvalidTextError(TradeValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"Invalid text for {field}: must be a string")


class InconsistentTradeError(TradeValidationError):
    """Fields are individually valid but contradict each other."""


class AuthenticationError(JournalError):
    """A login attempt failed. The message is safe to return to the client."""


class RegistrationError(JournalError):
    """A journal user could not be created."""


class CryptoListError(JournalError):
    """The crypto catalogue could not be fetched or written."""
