import os
import sys

import pytest

from phloem import Widget

# Ensure local test helpers can be imported with `import helpers`
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    sys.path.insert(0, tests_dir)


@pytest.fixture(params=["simplex", "glop"])
def backend(request):
    """Every reflow scenario runs against both solver backends."""
    return request.param


@pytest.fixture()
def article():
    """Article page: related articles hidden, floating buttons beside the main column."""
    return [
        Widget("header", 0, 0, 300, 37.5),
        Widget("sidebar", 0, 40, 62.5, 200),
        Widget("main", 65, 40, 200, 100),
        Widget("related", 65, 150, 200, 40, hidden=True),
        Widget("comments", 65, 200, 200, 75),
        Widget("footer", 0, 240, 300, 37.5),
        Widget("fb", 270, 45, 25, 25),
        Widget("ig", 270, 75, 25, 25),
    ]


@pytest.fixture()
def grid():
    """Staggered, heavily overlapping grid."""
    return [
        Widget("a0", 0, 0, 100, 100),
        Widget("a1", 50, 50, 100, 100),
        Widget("a2", 100, 0, 100, 100),
        Widget("a3", 150, 50, 100, 100),
        Widget("a4", 200, 0, 100, 100),
        Widget("b0", 10, 80, 100, 100),
        Widget("b1", 60, 130, 100, 100),
        Widget("b2", 110, 80, 100, 100),
        Widget("b3", 160, 130, 100, 100),
        Widget("b4", 210, 80, 100, 100),
    ]
