"""
Logical-to-Physical LED Mapping

This module provides:
- The fixed wiring table of the 16-LED vehicle strip harness
- Logical -> physical index lookup
- Whole-frame remapping from logical order to physical wire order
- Bijection validation of the wiring table

Configurations address LEDs logically (0 = leftmost, left to right). The
harness is wired so that the data line enters in the middle of the strip:

| Logical | Physical |   | Logical | Physical |
|---------|----------|---|---------|----------|
| 0       | 3        |   | 8       | 0        |
| 1       | 4        |   | 9       | 1        |
| 2       | 5        |   | 10      | 2        |
| 3       | 6        |   | 11      | 11       |
| 4       | 7        |   | 12      | 12       |
| 5       | 8        |   | 13      | 13       |
| 6       | 9        |   | 14      | 14       |
| 7       | 10       |   | 15      | 15       |

Version: 1.0.0
"""

from typing import List, Sequence, Tuple

from designer_models import RGBColor


# ============================================================
# WIRING TABLE
# ============================================================

# Physical wiring of the strip harness, indexed by logical LED.
# This is measured hardware, not geometry: do not replace with a formula.
LOGICAL_TO_PHYSICAL: Tuple[int, ...] = (
    3, 4, 5, 6, 7, 8, 9, 10,
    0, 1, 2, 11, 12, 13, 14, 15,
)

STRIP_LED_COUNT = len(LOGICAL_TO_PHYSICAL)

# Physical index reported for logical indices outside the harness
OUT_OF_RANGE_PHYSICAL = 0


# ============================================================
# Lookup
# ============================================================

def map_logical_to_physical(logical_index: int) -> int:
    """
    Physical wire position of a logical LED.

    Only defined for 0-15. Out-of-range indices return 0; callers are
    expected to pass validated indices.
    """
    if 0 <= logical_index < STRIP_LED_COUNT:
        return LOGICAL_TO_PHYSICAL[logical_index]
    return OUT_OF_RANGE_PHYSICAL


def physical_position(logical_index: int) -> int:
    """
    Frame-level position of a logical LED.

    Same as map_logical_to_physical() on the harness; LEDs past the
    harness (strips longer than 16) keep their logical position.
    """
    if logical_index >= STRIP_LED_COUNT:
        return logical_index
    return map_logical_to_physical(logical_index)


def remap_to_physical(logical_colors: Sequence[RGBColor]) -> List[RGBColor]:
    """
    Reorder a logical frame into physical wire order.

    The result always covers the 16 harness positions, even for shorter
    logical frames.
    """
    size = max(len(logical_colors), STRIP_LED_COUNT)
    physical = [RGBColor() for _ in range(size)]
    for logical_index, color in enumerate(logical_colors):
        physical[physical_position(logical_index)] = color
    return physical


# ============================================================
# Validation
# ============================================================

def validate_wiring(table: Sequence[int] = LOGICAL_TO_PHYSICAL) -> Tuple[bool, List[str]]:
    """
    Check that a wiring table is a permutation of 0..n-1.

    Returns:
        (is_valid, list_of_errors)
    """
    errors = []
    n = len(table)
    seen = set()

    for logical_index, physical in enumerate(table):
        if physical < 0 or physical >= n:
            errors.append(f"Logical {logical_index} maps to {physical}, out of range (0-{n - 1})")
        if physical in seen:
            errors.append(f"Physical {physical} used by multiple logical LEDs")
        seen.add(physical)

    return len(errors) == 0, errors


def wiring_table_dict() -> dict:
    """Export the wiring table (logical -> physical) for API consumers"""
    return {
        'led_count': STRIP_LED_COUNT,
        'logical_to_physical': list(LOGICAL_TO_PHYSICAL),
    }
