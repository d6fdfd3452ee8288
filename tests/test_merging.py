from sticky_notes.merging import expand_corners, merge_candidates
from sticky_notes.models import Candidate, Point


def box(c):
    b = c.box
    return (b.min_x, b.min_y, b.max_x, b.max_y)


def test_merge_empty():
    assert merge_candidates([]) == []


def test_merge_overlapping_channels(overlapping_candidates):
    merged = merge_candidates(overlapping_candidates)
    assert len(merged) == 1
    assert box(merged[0]) == (100, 100, 400, 400)


def test_merge_keeps_disjoint_in_scan_order():
    candidates = [
        Candidate.from_corners(600, 50, 700, 150),
        Candidate.from_corners(50, 50, 150, 150),
    ]
    assert merge_candidates(candidates) == candidates


def test_merge_larger_box_takes_over():
    small = Candidate.from_corners(200, 200, 300, 300)
    large = Candidate.from_corners(100, 100, 500, 500)
    # grown small box (160,160)-(360,360) lies strictly inside the large one
    assert merge_candidates([small, large]) == [large]
    assert merge_candidates([large, small]) == [large]


def test_merge_result_depends_on_scan_order():
    a = Candidate.from_corners(100, 100, 200, 200)
    b = Candidate.from_corners(95, 95, 230, 230)
    c = Candidate.from_corners(300, 300, 400, 400)
    # a absorbs b, c stays separate; the kept box is the first one seen
    assert merge_candidates([a, b, c]) == [a, c]
    assert merge_candidates([b, a, c]) == [b, c]


def test_expand_corners_truncates():
    assert expand_corners(Point(x=17, y=11), Point(x=11, y=13), 0.2) == (13, 8, 13, 15)


def test_merge_truncation_boundary():
    # 17 * 0.8 = 13.6 truncates to 13, so t's min corner at 13 is still inside;
    # rounding would give 14 and keep both boxes
    rep = Candidate.from_corners(17, 17, 100, 100)
    t = Candidate.from_corners(13, 13, 100, 100)
    assert merge_candidates([rep, t]) == [rep]


def test_merge_zero_tolerance_requires_exact_containment():
    outer = Candidate.from_corners(100, 100, 400, 400)
    shifted = Candidate.from_corners(105, 95, 395, 395)
    assert merge_candidates([outer, shifted], coef=0.0) == [outer, shifted]
    assert merge_candidates([outer, shifted], coef=0.2) == [outer]


def test_merge_is_idempotent():
    candidates = [
        Candidate.from_corners(100, 100, 400, 400),
        Candidate.from_corners(600, 600, 800, 800),
        Candidate.from_corners(110, 110, 390, 390),
        Candidate.from_corners(620, 610, 790, 790),
        Candidate.from_corners(50, 700, 200, 850),
    ]
    once = merge_candidates(candidates)
    twice = merge_candidates(once)
    assert sorted(map(box, twice)) == sorted(map(box, once))
    assert len(once) == 3


def test_small_box_first_survives_next_to_its_container():
    small = Candidate.from_corners(100, 100, 200, 200)
    large = Candidate.from_corners(90, 90, 400, 400)
    # the small box is processed first and cannot reach the large one;
    # the large box then absorbs nothing new, so both are kept
    assert merge_candidates([small, large]) == [small, large]
    assert merge_candidates([large, small]) == [large]


def test_merged_candidates_do_not_contain_each_other():
    # holds for these inputs because every container is scanned first
    candidates = [
        Candidate.from_corners(100, 100, 300, 300),
        Candidate.from_corners(500, 100, 700, 300),
        Candidate.from_corners(105, 105, 290, 290),
        Candidate.from_corners(510, 110, 690, 300),
        Candidate.from_corners(100, 500, 300, 700),
    ]
    merged = merge_candidates(candidates)
    for i, rep in enumerate(merged):
        min_x, min_y, max_x, max_y = expand_corners(rep.top_left, rep.bottom_right, 0.2)
        for j, other in enumerate(merged):
            if i == j:
                continue
            inside = (
                min_x <= other.box.min_x
                and min_y <= other.box.min_y
                and max_x >= other.box.max_x
                and max_y >= other.box.max_y
            )
            assert not inside
