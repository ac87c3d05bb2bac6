from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from colortool.errors import DomainError

from .chromaticity import xy_to_xyz

if TYPE_CHECKING:
    from colortool.registry import ColorSpace


SINGULAR_DET_EPSILON = 1e-10


def invert_matrix(m: np.ndarray, what: str = "matrix") -> np.ndarray:
    arr = np.asarray(m, dtype=np.float64)
    if arr.shape != (3, 3):
        raise DomainError(f"{what} must be 3x3, got shape {arr.shape}")
    if not np.isfinite(arr).all():
        raise DomainError(f"{what} contains non-finite values")

    det = float(np.linalg.det(arr))
    if abs(det) < SINGULAR_DET_EPSILON:
        raise DomainError(f"{what} is singular or near-singular (det={det:.3e})")
    return np.linalg.inv(arr)


def rgb_to_xyz_matrix(r: np.ndarray, g: np.ndarray, b: np.ndarray, whitepoint: np.ndarray) -> np.ndarray:
    """Build the RGB -> XYZ matrix for primaries and white point given as XYZ vectors.

    Each primary column is scaled so that RGB (1, 1, 1) maps onto ``whitepoint``.
    """

    m = np.column_stack(
        [
            np.asarray(r, dtype=np.float64),
            np.asarray(g, dtype=np.float64),
            np.asarray(b, dtype=np.float64),
        ]
    )
    w = np.asarray(whitepoint, dtype=np.float64)
    s = invert_matrix(m, "primaries matrix") @ w
    return m * s


def xyz_to_rgb_matrix(rgb_to_xyz: np.ndarray) -> np.ndarray:
    return invert_matrix(rgb_to_xyz, "RGB to XYZ matrix")


def colorspace_rgb_to_xyz(space: ColorSpace) -> np.ndarray:
    return rgb_to_xyz_matrix(
        xy_to_xyz(space.red),
        xy_to_xyz(space.green),
        xy_to_xyz(space.blue),
        xy_to_xyz(space.whitepoint),
    )
