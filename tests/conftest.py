from __future__ import annotations

import pytest

from orginline import messages as m


@pytest.fixture(autouse=True)
def quietMessages():
    # Lints and warnings from the parser shouldn't clutter the test output.
    # Tests that care about messages open their own state inside this one.
    with m.messagesSilent() as state:
        yield state
