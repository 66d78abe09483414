"""
Shared test fixtures and sample inputs for tabstore tests.

Sample file contents are module-level constants so tests can write them
to ``tmp_path`` or wrap them in ``io.StringIO`` / ``io.BytesIO``.
"""

from __future__ import annotations

import pytest

from tabstore.store import TabularStore

# ---------------------------------------------------------------------------
# Sample inputs
# ---------------------------------------------------------------------------
CARS_JSON = """\
[
  {"name": "Car1", "image": "u1", "class": "Minivan"},
  {"name": "Car2", "class": "Luxury"}
]
"""

CARS_CSV = """\
name,class,price
Civic,Compact,22000
Model S,Luxury,79990
Odyssey,Minivan,38000
"""

NOTES_TXT = """\
first line

second line
third line
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def cars_json() -> str:
    """JSON array of two cars; the second lacks 'image'."""
    return CARS_JSON


@pytest.fixture()
def cars_csv() -> str:
    """Three-car CSV with a header row."""
    return CARS_CSV


@pytest.fixture()
def notes_txt() -> str:
    """Plain text: three lines with a blank one between."""
    return NOTES_TXT


@pytest.fixture()
def cars() -> list[dict]:
    """Records with a column ('image') missing from one of them."""
    return [
        {"name": "Civic", "class": "Compact", "price": "22000", "image": "civic.png"},
        {"name": "Model S", "class": "Luxury", "price": "79990"},
        {"name": "Odyssey", "class": "Minivan", "price": "38000", "image": "ody.jpg"},
        {"name": "Accord", "class": "Midsize", "price": "27000", "image": ""},
    ]


@pytest.fixture()
def store(cars) -> TabularStore:
    """A store initialized with the ``cars`` records."""
    s = TabularStore()
    s.initialize(cars)
    return s


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (parse -> store -> export)",
    )
