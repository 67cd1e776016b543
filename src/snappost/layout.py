"""Reading-order reconstruction from positionally unordered OCR fragments."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import Row, TextFragment

logger = logging.getLogger(__name__)

DEFAULT_Y_TOLERANCE = 18.0


def group_rows(
    fragments: Iterable[TextFragment], y_tolerance: float = DEFAULT_Y_TOLERANCE
) -> list[Row]:
    """Cluster fragments into rows, top to bottom, each read left to right.

    A fragment joins the first row (in creation order) whose reference center,
    the vertical center of the row's first fragment, lies within
    ``y_tolerance``. It is not moved to a closer row created later.
    """
    rows: list[Row] = []
    for fragment in fragments:
        center = fragment.bbox.mid_y
        for row in rows:
            if abs(center - row.reference_center) <= y_tolerance:
                row.fragments.append(fragment)
                break
        else:
            rows.append(Row([fragment]))

    rows.sort(key=lambda row: row.reference_center)
    for row in rows:
        row.fragments.sort(key=lambda fragment: fragment.bbox.min_x)
    return rows


def reconstruct_lines(
    fragments: Iterable[TextFragment], y_tolerance: float = DEFAULT_Y_TOLERANCE
) -> list[str]:
    """Return the non-empty text of each reconstructed row in reading order."""
    rows = group_rows(fragments, y_tolerance)
    lines = [text for text in (row.text() for row in rows) if text.strip()]
    logger.debug("Reconstructed %d line(s) from %d row(s)", len(lines), len(rows))
    return lines
