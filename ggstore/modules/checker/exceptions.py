"""Card checker exceptions."""


class CheckerError(Exception):
    """Base class for card checker errors."""


class InvalidCardInputError(CheckerError):
    """Raised when the value to check is not a plausible card number."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Not a card number: {raw!r}")
