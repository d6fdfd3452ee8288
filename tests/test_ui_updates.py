"""Tests for the cached stages, image registry and UI update functions.

These check the behavioral contracts the Gradio interface relies on
without starting the interface itself.
"""

import numpy as np
import pytest

from sticky_notes.app_state import (
    get_image_by_id,
    get_image_id,
    load_fixed_image,
    register_image,
)
from sticky_notes.cache import (
    cached_candidate_detection,
    cached_channel_processing,
    cached_detection,
    clear_all_caches,
)
from sticky_notes.pipeline import InvalidImageError
from sticky_notes.ui_updates import (
    register_upload,
    update_channel_view,
    update_detection_view,
)

DEFAULTS = (51, 1.0, False, 1.1, 0.2, 3)


def test_register_image_is_content_addressed(light_square_image):
    first = get_image_id(light_square_image)
    second = register_image(light_square_image.copy())
    assert first == second
    assert get_image_by_id(first) is not None


def test_register_image_explicit_id(small_bgr_image):
    assert register_image(small_bgr_image, "board") == "board"
    assert get_image_by_id("board") is small_bgr_image


def test_get_image_by_unknown_id():
    assert get_image_by_id("missing") is None


def test_load_fixed_image_missing_file(tmp_path):
    assert load_fixed_image(str(tmp_path / "nope.jpg")) is None


def test_cached_detection_reuses_results(light_square_image):
    image_id = get_image_id(light_square_image)
    first = cached_detection(image_id, *DEFAULTS)
    second = cached_detection(image_id, *DEFAULTS)
    assert first is second
    assert len(first.candidates) == 1
    assert cached_channel_processing.cache_info().currsize == 1
    assert cached_candidate_detection.cache_info().currsize == 1


def test_clear_all_caches(light_square_image):
    image_id = get_image_id(light_square_image)
    cached_detection(image_id, *DEFAULTS)
    clear_all_caches()
    assert cached_detection.cache_info().currsize == 0
    assert cached_channel_processing.cache_info().currsize == 0


def test_cached_detection_unknown_image():
    with pytest.raises(InvalidImageError):
        cached_detection("missing", *DEFAULTS)


def test_register_upload_converts_rgb_to_bgr():
    rgb = np.zeros((4, 4, 3), dtype=np.uint8)
    rgb[..., 0] = 255  # red in RGB
    image_id = register_upload(rgb)
    stored = get_image_by_id(image_id)
    assert stored[0, 0].tolist() == [0, 0, 255]


def test_register_upload_none():
    assert register_upload(None) is None


def test_update_channel_view_without_image():
    assert update_channel_view(None, 51, 1.0, False) == (None, None, None)


def test_update_channel_view_masks(light_square_image):
    image_id = get_image_id(light_square_image)
    green, u, v = update_channel_view(image_id, 51, 1.0, False)
    assert green.shape == (1000, 1000, 3)
    assert green.any()
    assert not u.any() and not v.any()


def test_update_channel_view_invalid_parameters(light_square_image):
    image_id = get_image_id(light_square_image)
    # even neighborhood sizes are rejected and reported, not raised
    assert update_channel_view(image_id, 50, 1.0, False) == (None, None, None)


def test_update_detection_view_without_image():
    annotated, crops, status = update_detection_view(None, *DEFAULTS)
    assert annotated is None
    assert crops == []
    assert status == "No image loaded"


def test_update_detection_view_unknown_image():
    annotated, crops, status = update_detection_view("missing", *DEFAULTS)
    assert annotated is None
    assert crops == []
    assert status.startswith("Detection failed")


def test_update_detection_view_single_note(light_square_image):
    image_id = get_image_id(light_square_image)
    annotated, crops, status = update_detection_view(image_id, *DEFAULTS)
    assert annotated.shape == (1000, 1000, 3)
    assert len(crops) == 1
    assert status == "1 sticky note detected"


def test_update_detection_view_no_notes(uniform_image):
    image_id = get_image_id(uniform_image)
    annotated, crops, status = update_detection_view(image_id, *DEFAULTS)
    assert np.array_equal(annotated, uniform_image[..., ::-1])
    assert crops == []
    assert status == "0 sticky notes detected"
