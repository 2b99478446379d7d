"""
Shared fixtures for the test suite.
"""

import os
import tempfile
import textwrap

from location_hierarchy.models import City, District


def write_temp_csv(content: str) -> str:
    """Write CSV text to a temporary file and return its path."""
    handle = tempfile.NamedTemporaryFile(
        mode='w', suffix='.csv', delete=False, encoding='utf-8'
    )
    with handle:
        handle.write(textwrap.dedent(content).lstrip())
    return handle.name


def remove_file(path: str):
    if path and os.path.exists(path):
        os.unlink(path)


def small_cities():
    """Two-city tree used where the packaged table is too large to reason about."""
    return (
        City(
            name="Alpha",
            districts=(
                District("North", ("Harbor", "Old Town")),
                District("South", ("South", "Riverside, Lower")),
            )
        ),
        City(
            name="Beta",
            districts=(
                District("North", ("Hillcrest",)),
            )
        ),
    )
