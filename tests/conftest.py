import os

import pytest
from hypothesis import HealthCheck, settings

from letter.letter_parser import Parser

settings.register_profile("ci", max_examples=300, deadline=None)
settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture  # type: ignore[misc]
def parser() -> Parser:
    return Parser()
