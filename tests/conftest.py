"""Shared test fixtures for buffer engine tests."""
import pytest
from planar.model import make_polygon, make_linestring, make_point
from bufferop.params import BufferParams


@pytest.fixture(scope="session")
def unit_square():
    """1 x 1 square at the origin."""
    return make_polygon([(0, 0), (1, 0), (1, 1), (0, 1)])


@pytest.fixture(scope="session")
def big_square():
    """10 x 10 square at the origin."""
    return make_polygon([(0, 0), (10, 0), (10, 10), (0, 10)])


@pytest.fixture(scope="session")
def square_with_hole():
    """10 x 10 square with a centred 2 x 2 hole."""
    return make_polygon([(0, 0), (10, 0), (10, 10), (0, 10)],
                        [[(4, 4), (6, 4), (6, 6), (4, 6)]])


@pytest.fixture(scope="session")
def zigzag():
    """3-segment polyline: east, north, east."""
    return make_linestring([(0, 0), (4, 0), (4, 4), (8, 4)])


@pytest.fixture(scope="session")
def origin():
    return make_point((0, 0))


@pytest.fixture(scope="session")
def params():
    """Default buffer parameters."""
    return BufferParams()
