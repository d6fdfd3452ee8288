import pytest
from sticky_notes.models import BoundingBox, Candidate


@pytest.fixture
def valid_box():
    return BoundingBox(min_x=10, min_y=20, max_x=110, max_y=100)


@pytest.fixture
def valid_candidate(valid_box):
    return Candidate(box=valid_box)
