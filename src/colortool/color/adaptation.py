from __future__ import annotations

import enum

import numpy as np

from colortool.errors import DomainError

from .primaries import invert_matrix


class AdaptationMethod(enum.Enum):
    XYZ_SCALING = "xyzscaling"
    BRADFORD = "bradford"
    CAT02 = "cat02"
    VON_KRIES = "vonkries"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str | AdaptationMethod) -> AdaptationMethod:
        if isinstance(value, AdaptationMethod):
            return value
        key = str(value).strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        for method in cls:
            if method.value == key:
                return method
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"could not parse adaptation method: {value!r} (expected one of: {choices})")


_LABELS = {
    AdaptationMethod.XYZ_SCALING: "XYZScaling",
    AdaptationMethod.BRADFORD: "Bradford",
    AdaptationMethod.CAT02: "CAT02",
    AdaptationMethod.VON_KRIES: "VonKries",
}

# Cone response (LMS-like) matrices, rows map XYZ onto each response channel.
_CONE_RESPONSE: dict[AdaptationMethod, np.ndarray] = {
    AdaptationMethod.XYZ_SCALING: np.eye(3, dtype=np.float64),
    AdaptationMethod.BRADFORD: np.array(
        [
            [0.8951, 0.2664, -0.1614],
            [-0.7502, 1.7135, 0.0367],
            [0.0389, -0.0685, 1.0296],
        ],
        dtype=np.float64,
    ),
    AdaptationMethod.CAT02: np.array(
        [
            [0.7328, 0.4296, -0.1624],
            [-0.7036, 1.6975, 0.0061],
            [0.0030, 0.0136, 0.9834],
        ],
        dtype=np.float64,
    ),
    AdaptationMethod.VON_KRIES: np.array(
        [
            [0.40024, 0.70760, -0.08081],
            [-0.22630, 1.16532, 0.04570],
            [0.00000, 0.00000, 0.91822],
        ],
        dtype=np.float64,
    ),
}


def cone_response_matrix(method: AdaptationMethod) -> np.ndarray:
    if not isinstance(method, AdaptationMethod):
        raise ValueError(f"not a computable adaptation method: {method!r}")
    return _CONE_RESPONSE[method].copy()


def adaptation_matrix(src_xyz: np.ndarray, dst_xyz: np.ndarray, method: AdaptationMethod) -> np.ndarray:
    """Von Kries style white point adaptation in the cone space of ``method``.

    The result maps ``src_xyz`` exactly onto ``dst_xyz``.
    """

    m = cone_response_matrix(method)
    m_inv = invert_matrix(m, f"{method.label} cone response matrix")

    src_lms = m @ np.asarray(src_xyz, dtype=np.float64)
    dst_lms = m @ np.asarray(dst_xyz, dtype=np.float64)

    if not np.isfinite(src_lms).all() or np.any(src_lms == 0.0):
        raise DomainError(f"source white point has a zero {method.label} cone response: {src_lms.tolist()}")

    d = np.diag(dst_lms / src_lms)
    return m_inv @ d @ m
