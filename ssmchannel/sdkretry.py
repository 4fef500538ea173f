"""Retry delay rules for service API calls."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import timedelta

_TIMEOUT_DELAY = timedelta(milliseconds=100)


@dataclass
class SsmCliRetryer:
    """Decides how long to wait before retrying a failed service request."""

    num_max_retries: int = 3
    _random: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def retry_rules(
        self, operation_name: str, error: object | None, retry_count: int
    ) -> timedelta:
        """Delay before retrying the named operation after its retry_count-th retry."""
        if (
            operation_name == "GetMessages"
            and error is not None
            and "Client.Timeout" in str(error)
        ):
            return _TIMEOUT_DELAY
        delay = int(2 ** retry_count) * (self._random.randrange(500) + 1000)
        return timedelta(milliseconds=delay)