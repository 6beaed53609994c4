import pytest

from compression_worker.image.dimensions import plan_dimensions


def test_width_bound_scales_both_dimensions():
    assert plan_dimensions(200, 150, max_width=100) == (100, 75)


def test_height_bound_applies_when_width_is_not_exceeded():
    assert plan_dimensions(200, 400, max_width=300, max_height=100) == (50, 100)


def test_width_bound_takes_precedence_over_height_bound():
    # Height 150 still exceeds 50 afterwards; the width branch wins anyway.
    assert plan_dimensions(400, 300, max_width=200, max_height=50) == (200, 150)


@pytest.mark.parametrize(
    "max_width,max_height",
    [(None, None), (200, None), (None, 150), (500, 500)],
)
def test_identity_when_no_bound_is_exceeded(max_width, max_height):
    assert plan_dimensions(200, 150, max_width, max_height) == (200, 150)


def test_height_rounding_is_half_up():
    # 101 * 50 / 100 = 50.5
    assert plan_dimensions(100, 101, max_width=50) == (50, 51)


def test_width_scaled_for_height_bound():
    assert plan_dimensions(333, 1000, max_height=100) == (33, 100)


def test_extreme_aspect_ratio_keeps_one_pixel():
    assert plan_dimensions(10000, 1, max_width=10) == (10, 1)
