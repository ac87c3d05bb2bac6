from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence, Union

import numpy as np

from colortool.errors import DomainError


@dataclass(frozen=True)
class ChromaticityPoint:
    x: float
    y: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


XYLike = Union[ChromaticityPoint, Sequence[float], np.ndarray]


def xy_to_xyz(xy: XYLike) -> np.ndarray:
    """Convert a chromaticity coordinate to a tristimulus vector with Y = 1."""

    if isinstance(xy, ChromaticityPoint):
        x, y = float(xy.x), float(xy.y)
    else:
        x, y = float(xy[0]), float(xy[1])

    if not (math.isfinite(x) and math.isfinite(y)):
        raise DomainError(f"chromaticity must be finite, got ({x}, {y})")
    if y == 0.0:
        raise DomainError(f"chromaticity y must be non-zero, got ({x}, {y})")
    return np.array([x / y, 1.0, (1.0 - x - y) / y], dtype=np.float64)
