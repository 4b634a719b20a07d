"""Plain-text vertex-row mesh parser -> Mesh.

The format is line based.  A line holding exactly five decimal numbers
(``x y z u v``) is a vertex row; every other line (comments, headers,
blank lines, rows with too few or too many numbers) is ignored.
Consecutive vertex rows are taken three at a time to form triangles and
a trailing group of one or two rows is dropped.

Decoding never raises: malformed input degrades to fewer triangles,
``0.0`` components, or the degenerate placeholder triangle.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Sequence

from meshwalk.core.mesh import DEGENERATE_TRIANGLE, Mesh, Triangle, Vertex

logger = logging.getLogger(__name__)

# Signed decimal with a mandatory fractional part, e.g. ``-12.500``; ASCII digits only
NUMBER_PATTERN = re.compile(r"-?\d+\.\d+", re.ASCII)

# x, y, z, u, v
ROW_WIDTH = 5
TRIANGLE_SIZE = 3


def extract_numeric_matches(lines: Iterable[str]) -> list[list[str]]:
    """Return the decimal tokens of each line, in line and match order.

    A line without any match yields an empty list.
    """
    return [NUMBER_PATTERN.findall(line) for line in lines]


def parse_float_or_default(token: str, default: float = 0.0) -> float:
    """Convert *token* to float, falling back to *default*."""
    try:
        return float(token)
    except (TypeError, ValueError):
        return default


def parse_row(tokens: Sequence[str]) -> tuple[float, ...]:
    return tuple(parse_float_or_default(token) for token in tokens)


def group_rows(rows: Sequence[tuple[float, ...]], size: int = TRIANGLE_SIZE) -> list[list[tuple[float, ...]]]:
    """Split *rows* into consecutive full groups of *size*.

    A trailing partial group is discarded, not padded.
    """
    full = len(rows) - len(rows) % size
    return [list(rows[i:i + size]) for i in range(0, full, size)]


def make_vertex(row: Sequence[float]) -> Vertex:
    """Build a vertex from an ``(x, y, z, u, v)`` row."""
    x, y, z, u, v = row
    return Vertex(position=(x, y, z), coord=(u, v, 0.0))


def make_triangle(group: Sequence[Sequence[float]]) -> Triangle:
    """Build a triangle from three rows, or the degenerate placeholder."""
    if len(group) != TRIANGLE_SIZE:
        return DEGENERATE_TRIANGLE
    a, b, c = group
    return Triangle(make_vertex(a), make_vertex(b), make_vertex(c))


def decode_mesh(text: str) -> Mesh:
    """Parse mesh text into a :class:`Mesh`.

    Parameters
    ----------
    text : str
        Contents of a mesh text file.

    Returns
    -------
    Mesh
        ``len(valid_rows) // 3`` triangles in source order.
    """
    matches = extract_numeric_matches(text.split("\n"))
    rows = [parse_row(tokens) for tokens in matches if len(tokens) == ROW_WIDTH]
    triangles = tuple(make_triangle(group) for group in group_rows(rows))
    logger.debug(
        "Decoded %d triangles from %d vertex rows (%d lines, %d rows dropped)",
        len(triangles), len(rows), len(matches), len(rows) % TRIANGLE_SIZE,
    )
    return Mesh(triangles)


def load_mesh_file(path) -> Mesh:
    """Load a mesh text file from disk.

    Parameters
    ----------
    path : str or Path
        Path to the mesh text file.

    Returns
    -------
    Mesh
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return decode_mesh(text)
