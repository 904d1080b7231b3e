"""Fill uncolored sub-segments from their nearest colored neighbours."""
from __future__ import annotations

from typing import List, Optional, Tuple

from rough_ride.contracts.segment_contract import RGB, Segment
from rough_ride.core.colors import FALLBACK_COLOR, lerp_color

# Maximum sub-segments to reach across an empty stretch
MAX_GAP_FILL = 20


def _nearest_computed(
    originals: List[Optional[RGB]], i: int, step: int
) -> Tuple[int, Optional[RGB]]:
    """Steps from *i* to the nearest anchor and its color, looking at most
    MAX_GAP_FILL steps away. Color is None when nothing is in reach."""
    gap = 0
    j = i + step
    while 0 <= j < len(originals) and gap < MAX_GAP_FILL:
        gap += 1
        if originals[j] is not None:
            return gap, originals[j]
        j += step
    return gap, None


def fill_gaps(segments: List[Segment]) -> List[Segment]:
    """
    Give every uncolored segment a color.

    Only colors computed from samples act as anchors, so filled segments
    never feed later fills. Both anchors within ``MAX_GAP_FILL``: blend by
    relative position. One anchor in range: copy it. Neither: fallback blue.
    """
    originals: List[Optional[RGB]] = [s.color if s.computed else None for s in segments]

    for i, seg in enumerate(segments):
        if seg.color is not None:
            continue

        gap_prev, prev_color = _nearest_computed(originals, i, -1)
        gap_next, next_color = _nearest_computed(originals, i, 1)

        prev_ok = prev_color is not None and gap_prev <= MAX_GAP_FILL
        next_ok = next_color is not None and gap_next <= MAX_GAP_FILL

        if prev_ok and next_ok:
            seg.color = lerp_color(prev_color, next_color, gap_prev / (gap_prev + gap_next))
        elif prev_ok:
            seg.color = prev_color
        elif next_ok:
            seg.color = next_color
        else:
            seg.color = FALLBACK_COLOR

    return segments
