"""
Infrastructure-specific decorators, providing cross-cutting concerns like
retry logic for mirror fetches.
"""

import logging

from tenacity import (
    retry,
    stop_after_attempt,
    wait_none,
    retry_if_exception_type,
)

from ..application.exceptions import NetworkError, VerificationError

logger = logging.getLogger(__name__)

# --- Constants for Retry Logic ---
RETRY_ATTEMPTS = 4


def _log_before_retry(retry_state):
    """Log the failed attempt with the error and the attempts remaining."""
    exception = retry_state.outcome.exception()
    remaining = RETRY_ATTEMPTS - retry_state.attempt_number
    logger.warning(
        f"{type(exception).__name__}: {exception}. "
        f"Trying {retry_state.fn.__name__} again... ({remaining} more)"
    )


# Retries without delay; the last error is re-raised unchanged once the
# attempts are spent.
retry_on_transient_error = retry(
    stop=stop_after_attempt(RETRY_ATTEMPTS),
    wait=wait_none(),
    retry=retry_if_exception_type((NetworkError, VerificationError)),
    before_sleep=_log_before_retry,
    reraise=True,
)
