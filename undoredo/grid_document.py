# grid_document.py
import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .action import Action

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Point:
    """
    Grid index. ``x`` is the row (ny axis, first array axis) and ``y`` the
    column (nx axis), so a point reads ``grid[point.x, point.y]``.
    """

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    # For easy comparison in selections
    def __eq__(self, other: Any):
        if not isinstance(other, Point):
            return False
        return self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


class GridDocument:
    """
    Editable 2-D float32 grid whose edits are expressed as undoable actions.

    Files are raw big-endian float32 (``>f4``) of shape ``(ny, nx)``.
    """

    def __init__(self, nx: int = 100, ny: int = 100):
        self._grid: NDArray[np.float32] = np.zeros((ny, nx), dtype=np.float32)

    @classmethod
    def from_file(cls, path: PathLike, nx: int, ny: int) -> "GridDocument":
        doc = cls(nx, ny)
        doc.load(path, nx, ny)
        return doc

    @property
    def grid(self) -> NDArray[np.float32]:
        return self._grid

    @property
    def shape(self) -> tuple[int, int]:
        return self._grid.shape  # type: ignore

    # File methods
    def load(self, path: PathLike, nx: int, ny: int):
        logger.info(f"Reading grid from {path}")
        z = np.fromfile(path, ">f4")
        if z.size != nx * ny:
            raise ValueError(
                f"{path} holds {z.size} values, expected nx*ny = {nx * ny}"
            )
        self._grid = z.reshape(ny, nx).astype(np.float32)

    def save(self, path: PathLike):
        logger.info(f"Saving grid to {path}")
        self._grid.astype(">f4").tofile(path)

    # Value methods
    def get_values(self, points: Sequence[Point]) -> list[float]:
        return [float(self._grid[p.x, p.y]) for p in points]

    def set_values(self, points: Sequence[Point], values: Sequence[float]):
        if len(points) != len(values):
            raise ValueError(
                f"Got {len(values)} values for {len(points)} points"
            )
        for point, value in zip(points, values):
            self._grid[point.x, point.y] = value

    def get_neighbors(self, x: int, y: int) -> list[Point]:
        neighbors: list[Point] = []
        directions = [(-1, 0), (1, 0), (0, -1), (0, 1)]
        for dx, dy in directions:
            row, col = x + dx, y + dy
            if 0 <= row < self._grid.shape[0] and 0 <= col < self._grid.shape[1]:
                neighbors.append(Point(row, col))
        return neighbors

    def average_points(self, points: Sequence[Point]):
        # Points are updated in order, later points see earlier results
        for point in points:
            neighbors = self.get_neighbors(point.x, point.y)
            if neighbors:
                avg = np.mean([self._grid[p.x, p.y] for p in neighbors])
                self._grid[point.x, point.y] = avg

    def clip(
        self,
        mindepth: Optional[float] = None,
        maxdepth: Optional[float] = None,
        landvalue: float = 100.0,
    ):
        z = self._grid
        if mindepth is not None:
            z[z > mindepth] = landvalue
        if maxdepth is not None:
            z[z < maxdepth] = maxdepth

    # Action factories
    def set_values_action(
        self,
        points: Sequence[Point],
        values: Sequence[float],
        description: str = "",
    ) -> Action:
        points = list(points)
        values = list(values)
        if len(points) != len(values):
            raise ValueError(
                f"Got {len(values)} values for {len(points)} points"
            )
        previous: list[float] = []

        def forward():
            # Save current values of the points for undo
            previous[:] = self.get_values(points)
            self.set_values(points, values)

        def reverse():
            self.set_values(points, previous)

        return Action(forward, reverse, description or f"Set {len(points)} value(s)")

    def average_action(
        self, points: Sequence[Point], description: str = ""
    ) -> Action:
        points = list(points)
        previous: list[float] = []

        def forward():
            previous[:] = self.get_values(points)
            self.average_points(points)

        def reverse():
            self.set_values(points, previous)

        return Action(
            forward, reverse, description or "Nearest neighbor average"
        )

    def clip_action(
        self,
        mindepth: Optional[float] = None,
        maxdepth: Optional[float] = None,
        landvalue: float = 100.0,
        description: str = "",
    ) -> Action:
        if mindepth is None and maxdepth is None:
            raise ValueError("Neither mindepth or maxdepth is given.")
        previous: list[NDArray[np.float32]] = []

        def forward():
            previous[:] = [self._grid.copy()]
            self.clip(mindepth, maxdepth, landvalue)

        def reverse():
            self._grid[...] = previous[0]

        return Action(forward, reverse, description or "Clip")
