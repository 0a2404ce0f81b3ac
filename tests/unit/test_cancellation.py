import pytest

from docintake.processor.cancellation import CANCELLED_MESSAGE, CancellationToken
from docintake.processor.exceptions import ProcessingCancelledError


class TestCancellationToken:
    def test_starts_uncancelled(self) -> None:
        token = CancellationToken()
        assert token.cancelled is False
        token.raise_if_cancelled()

    def test_cancel_raises_with_message(self) -> None:
        token = CancellationToken()
        token.cancel()

        assert token.cancelled is True
        with pytest.raises(ProcessingCancelledError) as exc_info:
            token.raise_if_cancelled()
        assert str(exc_info.value) == CANCELLED_MESSAGE == "Cancelled"
