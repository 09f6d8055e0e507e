import logging
import pytest
import random
import sys
from pathlib import Path

# Add the project root to sys.path so we can import grading
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from grading.persistence import InMemoryRecordStore, JsonRecordStore
from grading.services import Registry


# Common test fixtures
@pytest.fixture
def passing_marks():
    """Return the Jane Doe first-attempt marks (all above threshold)."""
    return {"CS101": 85, "CS102": 92, "CS103": 78, "CS104": 88, "CS105": 90, "CS106": 87}


@pytest.fixture
def failing_marks(passing_marks):
    """Return marks with CS101 below the passing mark."""
    marks = dict(passing_marks)
    marks["CS101"] = 30
    return marks


@pytest.fixture
def memory_store():
    """Return an empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def registry(memory_store):
    """Return an empty registry with a seeded number generator."""
    return Registry(memory_store, rng=random.Random(1234))


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Return a data file path inside a temporary directory."""
    return tmp_path / "data" / "students.json"


@pytest.fixture
def json_store(data_file: Path):
    """Return a JSON store backed by a temporary file."""
    return JsonRecordStore(str(data_file))


@pytest.fixture(autouse=True)
def reset_grading_logger():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("grading")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
