from __future__ import annotations

import numpy as np

from .primaries import invert_matrix


def compose_transform(input_xyz: np.ndarray, adaptation: np.ndarray, output_xyz: np.ndarray) -> np.ndarray:
    """Single matrix taking input RGB to output RGB, white point adaptation included."""

    m_xyz_to_output = invert_matrix(output_xyz, "output RGB to XYZ matrix")
    return m_xyz_to_output @ np.asarray(adaptation, dtype=np.float64) @ np.asarray(input_xyz, dtype=np.float64)
