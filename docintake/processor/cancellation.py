import threading

from docintake.processor.exceptions import ProcessingCancelledError

CANCELLED_MESSAGE = "Cancelled"


class CancellationToken:
    """Thread-safe flag checked between pipeline steps and between pages."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ProcessingCancelledError(CANCELLED_MESSAGE)
