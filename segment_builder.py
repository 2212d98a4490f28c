"""
Sparse Segment Builder

Scans a physical-order frame and emits each maximal run of consecutive
non-black LEDs as a Segment. Black LEDs are never encoded, so the byte cost
of a frame scales with the number of lit LEDs.

Example:
    [black, black, RED, RED, black, GREEN, black]
    -> Segment(start=2, colors=[RED, RED]), Segment(start=5, colors=[GREEN])
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from designer_models import RGBColor


@dataclass
class Segment:
    """A run of physically contiguous, lit LEDs within one frame"""
    start: int
    colors: List[RGBColor] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.colors)

    def to_dict(self) -> dict:
        return {
            'start': self.start,
            'length': self.length,
            'colors': [c.to_dict() for c in self.colors],
        }


def build_segments(physical_colors: Sequence[RGBColor]) -> List[Segment]:
    """Split a physical frame into lit runs, ordered by start index"""
    segments: List[Segment] = []
    current = None

    for index, color in enumerate(physical_colors):
        if color.is_black:
            current = None
            continue
        if current is None:
            current = Segment(start=index)
            segments.append(current)
        current.colors.append(color)

    return segments


def split_segment(segment: Segment, max_length: int) -> List[Segment]:
    """Break a segment into chunks of at most max_length LEDs"""
    if segment.length <= max_length:
        return [segment]
    return [
        Segment(start=segment.start + offset, colors=segment.colors[offset:offset + max_length])
        for offset in range(0, segment.length, max_length)
    ]
