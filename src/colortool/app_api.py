from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from colortool.color.adaptation import AdaptationMethod, adaptation_matrix
from colortool.color.chromaticity import xy_to_xyz
from colortool.color.primaries import colorspace_rgb_to_xyz, xyz_to_rgb_matrix
from colortool.color.transform import compose_transform
from colortool.registry import ColorSpace, Illuminant, Registry
from colortool.utils.formatting import matrix_to_json, vector_to_json


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorspaceTransform:
    input_space: ColorSpace
    output_space: ColorSpace
    method: AdaptationMethod
    input_xyz: np.ndarray
    output_xyz: np.ndarray
    input_whitepoint_xyz: np.ndarray
    output_whitepoint_xyz: np.ndarray
    adaptation: np.ndarray
    transform: np.ndarray

    @property
    def input_xyz_to_rgb(self) -> np.ndarray:
        return xyz_to_rgb_matrix(self.input_xyz)

    @property
    def output_xyz_to_rgb(self) -> np.ndarray:
        return xyz_to_rgb_matrix(self.output_xyz)

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "input_colorspace": self.input_space.name,
            "output_colorspace": self.output_space.name,
            "adaptation_method": self.method.label,
            "input_rgb_to_xyz": matrix_to_json(self.input_xyz),
            "input_xyz_to_rgb": matrix_to_json(self.input_xyz_to_rgb),
            "output_rgb_to_xyz": matrix_to_json(self.output_xyz),
            "output_xyz_to_rgb": matrix_to_json(self.output_xyz_to_rgb),
            "input_whitepoint_xyz": vector_to_json(self.input_whitepoint_xyz),
            "output_whitepoint_xyz": vector_to_json(self.output_whitepoint_xyz),
            "adaptation": matrix_to_json(self.adaptation),
            "transform": matrix_to_json(self.transform),
        }


@dataclass(frozen=True)
class IlluminantAdaptation:
    input_illuminant: Illuminant
    output_illuminant: Illuminant
    method: AdaptationMethod
    input_whitepoint_xyz: np.ndarray
    output_whitepoint_xyz: np.ndarray
    adaptation: np.ndarray

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "input_illuminant": self.input_illuminant.name,
            "output_illuminant": self.output_illuminant.name,
            "adaptation_method": self.method.label,
            "input_whitepoint_xyz": vector_to_json(self.input_whitepoint_xyz),
            "output_whitepoint_xyz": vector_to_json(self.output_whitepoint_xyz),
            "adaptation": matrix_to_json(self.adaptation),
        }


def compute_colorspace_transform(
    registry: Registry,
    input_space: str,
    output_space: str,
    method: AdaptationMethod = AdaptationMethod.BRADFORD,
) -> ColorspaceTransform:
    src = registry.colorspace(input_space)
    dst = registry.colorspace(output_space)
    logger.debug("transform %s -> %s using %s", src.name, dst.name, method.label)

    input_xyz = colorspace_rgb_to_xyz(src)
    output_xyz = colorspace_rgb_to_xyz(dst)
    src_white = xy_to_xyz(src.whitepoint)
    dst_white = xy_to_xyz(dst.whitepoint)

    adapt = adaptation_matrix(src_white, dst_white, method)
    return ColorspaceTransform(
        input_space=src,
        output_space=dst,
        method=method,
        input_xyz=input_xyz,
        output_xyz=output_xyz,
        input_whitepoint_xyz=src_white,
        output_whitepoint_xyz=dst_white,
        adaptation=adapt,
        transform=compose_transform(input_xyz, adapt, output_xyz),
    )


def compute_illuminant_adaptation(
    registry: Registry,
    input_illuminant: str,
    output_illuminant: str,
    method: AdaptationMethod = AdaptationMethod.BRADFORD,
) -> IlluminantAdaptation:
    src = registry.illuminant(input_illuminant)
    dst = registry.illuminant(output_illuminant)
    logger.debug("adapt %s -> %s using %s", src.name, dst.name, method.label)

    src_white = xy_to_xyz(src.whitepoint)
    dst_white = xy_to_xyz(dst.whitepoint)
    return IlluminantAdaptation(
        input_illuminant=src,
        output_illuminant=dst,
        method=method,
        input_whitepoint_xyz=src_white,
        output_whitepoint_xyz=dst_white,
        adaptation=adaptation_matrix(src_white, dst_white, method),
    )
