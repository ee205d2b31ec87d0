from __future__ import annotations

import pytest

from helpers import RecordingSleep


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()
