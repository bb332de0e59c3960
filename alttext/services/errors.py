"""Exceptions raised by the alt text services."""


class AltTextError(Exception):
    """Base class for service errors."""


class NoItemsError(AltTextError):
    """A bulk request contained no items."""

    def __init__(self) -> None:
        super().__init__("No items provided")


class InsufficientCreditsError(AltTextError):
    """The store cannot cover the requested number of generations."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Not enough credits. Need {required}, have {available}.")


class LedgerError(AltTextError):
    """A credit ledger update could not be written."""


class BatchGenerationError(AltTextError):
    """A batch aborted after reserving credits. The reservation has been refunded."""


class GenerationError(AltTextError):
    """The vision model did not produce alt text for an image."""


class SquarespaceError(AltTextError):
    """A Squarespace API call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
