"""Triangle mesh data structures (no GL dependencies)."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

Point3 = tuple[float, float, float]

# Floats per vertex in the interleaved array: position (3) + coord (3)
VERTEX_STRIDE = 6


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex.

    position: world-space (x, y, z)
    coord: texture coordinate (u, v, 0); the third component is unused
    """
    position: Point3
    coord: Point3


@dataclass(frozen=True)
class Triangle:
    """Three vertices; their order defines the winding."""
    a: Vertex
    b: Vertex
    c: Vertex

    @property
    def vertices(self) -> tuple[Vertex, Vertex, Vertex]:
        return (self.a, self.b, self.c)


_ORIGIN_VERTEX = Vertex(position=(0.0, 0.0, 0.0), coord=(0.0, 0.0, 0.0))

# Placeholder substituted for a row group that cannot form a triangle
DEGENERATE_TRIANGLE = Triangle(_ORIGIN_VERTEX, _ORIGIN_VERTEX, _ORIGIN_VERTEX)


@dataclass(frozen=True)
class Mesh:
    """An ordered, immutable sequence of triangles."""
    triangles: tuple[Triangle, ...] = ()

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self):
        return iter(self.triangles)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    @property
    def vertex_count(self) -> int:
        return len(self.triangles) * 3

    def vertex_array(self) -> NDArray[np.float32]:
        """Interleaved float32 array of shape (vertex_count, 6) for GL upload.

        Each row is ``x, y, z, u, v, 0`` in triangle order.
        """
        rows = [
            (*vertex.position, *vertex.coord)
            for triangle in self.triangles
            for vertex in triangle.vertices
        ]
        if not rows:
            return np.zeros((0, VERTEX_STRIDE), dtype=np.float32)
        return np.array(rows, dtype=np.float32)


EMPTY_MESH = Mesh()
