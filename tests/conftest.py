import numpy as np
import pytest

from sticky_notes.app_state import clear_registry
from sticky_notes.cache import clear_all_caches
from sticky_notes.models.core_models import Candidate


@pytest.fixture(autouse=True)
def clean_state():
    """Reset the image registry and stage caches around every test."""
    clear_registry()
    clear_all_caches()
    yield
    clear_registry()
    clear_all_caches()


@pytest.fixture
def small_bgr_image():
    # 2×2 BGR image: blue, green, red, black
    img = np.array(
        [[[255, 0, 0], [0, 255, 0]], [[0, 0, 255], [0, 0, 0]]], dtype=np.uint8
    )
    return img


@pytest.fixture
def light_square_image():
    # 1000×1000 dark background with one light-gray 300×300 square at (350,350)
    img = np.full((1000, 1000, 3), 30, dtype=np.uint8)
    img[350:650, 350:650] = 200
    return img


@pytest.fixture
def yellow_square_image():
    # Saturated note on a dark-gray background; shows up in all three channels
    img = np.full((1000, 1000, 3), 40, dtype=np.uint8)
    img[350:650, 350:650] = (0, 255, 255)
    return img


@pytest.fixture
def stripe_image():
    # 1000×1000 dark background with a bright 300×50 stripe
    img = np.full((1000, 1000, 3), 30, dtype=np.uint8)
    img[475:525, 350:650] = 220
    return img


@pytest.fixture
def uniform_image():
    return np.full((200, 300, 3), 90, dtype=np.uint8)


@pytest.fixture
def overlapping_candidates():
    # Same note seen by two channels with slightly different boxes
    return [
        Candidate.from_corners(100, 100, 400, 400),
        Candidate.from_corners(110, 110, 390, 390),
    ]


@pytest.fixture
def make_contour():
    """Factory for 4-point rectangle contours in OpenCV's (N, 1, 2) layout."""

    def _make(min_x, min_y, max_x, max_y):
        pts = [(min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y)]
        return np.array(pts, dtype=np.int32).reshape(-1, 1, 2)

    return _make
