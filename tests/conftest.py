from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

import pytest
import time_machine

# 1704067200.0
EPOCH = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> Iterator[time_machine.Traveller]:
    with time_machine.travel(EPOCH, tick=False) as traveller:
        yield traveller
