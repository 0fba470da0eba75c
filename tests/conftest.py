import pytest

from keypager import disable_tracing


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset observability state between tests."""
    yield
    disable_tracing()


@pytest.fixture
def rows():
    """Five rows with ids 1..5."""
    return [{"id": i, "name": f"row_{i}"} for i in range(1, 6)]


@pytest.fixture
def posts():
    """Posts with a non-unique score, a nullable rank and a unique id."""
    return [
        {"id": 1, "score": 10, "rank": 3},
        {"id": 2, "score": 20, "rank": None},
        {"id": 3, "score": 20, "rank": 1},
        {"id": 4, "score": 30, "rank": 2},
        {"id": 5, "score": 40, "rank": None},
        {"id": 6, "score": 50, "rank": 5},
    ]
