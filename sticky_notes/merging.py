"""Containment merge of duplicate note detections.

Each note is typically found once per channel with slightly different
boxes. The merge walks the candidates in input order and lets each
unprocessed candidate absorb every other candidate whose box fits inside
its own box grown by ``coef``. If instead the grown box fits strictly
inside another candidate, that larger candidate takes over as the group
representative.

The kept rectangle of a group depends on scan order: it is the
representative after the last containment transition, not the largest or
smallest box of the group. Candidates are always visited in list order so
the result is reproducible.
"""

import logging

from sticky_notes.models.core_models import Candidate, Point

logger = logging.getLogger(__name__)


def expand_corners(top_left: Point, bottom_right: Point, coef: float) -> tuple[int, int, int, int]:
    """Grow a box by ``coef`` relative to its coordinates.

    The min corner is scaled by ``1 - coef`` and the max corner by
    ``1 + coef``, each truncated toward zero. Rounding instead of
    truncating changes which boxes merge near the boundary.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y) of the grown box.
    """
    return (
        int(top_left.x * (1 - coef)),
        int(top_left.y * (1 - coef)),
        int(bottom_right.x * (1 + coef)),
        int(bottom_right.y * (1 + coef)),
    )


def merge_candidates(candidates: list[Candidate], coef: float = 0.2) -> list[Candidate]:
    """Collapse candidates that are (nearly) contained in one another.

    Args:
        candidates: Candidates from all channels, in detection order.
        coef: Tolerance used to grow the representative box before the
            containment tests.

    Returns:
        Merged candidates, one per group, in the order the groups were
        first encountered.
    """
    merged: list[Candidate] = []
    processed: set[int] = set()

    for m_idx, m_candidate in enumerate(candidates):
        if m_idx in processed:
            continue
        processed.add(m_idx)

        representative = m_candidate
        for t_idx, t_candidate in enumerate(candidates):
            t_corners = t_candidate.corners
            if len(t_corners) < 2:
                processed.add(t_idx)
                continue

            rep_min_x, rep_min_y, rep_max_x, rep_max_y = expand_corners(
                representative.top_left, representative.bottom_right, coef
            )
            t_min, t_max = t_corners[0], t_corners[2]

            if (
                rep_min_x <= t_min.x
                and rep_min_y <= t_min.y
                and rep_max_x >= t_max.x
                and rep_max_y >= t_max.y
            ):
                # t lies inside the grown representative
                processed.add(t_idx)
            elif (
                rep_min_x > t_min.x
                and rep_min_y > t_min.y
                and rep_max_x < t_max.x
                and rep_max_y < t_max.y
            ):
                # grown representative lies strictly inside t
                representative = t_candidate
                processed.add(t_idx)

        merged.append(representative)

    logger.debug(f"Merged {len(candidates)} candidates into {len(merged)}")
    return merged
