from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

from colortool.color.chromaticity import xy_to_xyz

if TYPE_CHECKING:
    from colortool.app_api import ColorspaceTransform, IlluminantAdaptation
    from colortool.registry import ColorSpace


INFO_PREFIX = "info: "


def format_vector(values: Sequence[float] | np.ndarray, precision: int = 6) -> str:
    return ", ".join(f"{float(v):.{precision}f}" for v in np.asarray(values, dtype=np.float64).ravel())


def format_matrix(label: str, m: np.ndarray, precision: int = 6) -> list[str]:
    lines = [f"{INFO_PREFIX}{label}"]
    for row in np.asarray(m, dtype=np.float64):
        lines.append(f"{INFO_PREFIX}    {format_vector(row, precision)}")
    return lines


def matrix_to_json(m: np.ndarray) -> list[list[float]]:
    return [[float(v) for v in row] for row in np.asarray(m, dtype=np.float64)]


def vector_to_json(v: np.ndarray) -> list[float]:
    return [float(x) for x in np.asarray(v, dtype=np.float64).ravel()]


def _colorspace_block(
    label: str,
    space: ColorSpace,
    rgb_to_xyz: np.ndarray,
    xyz_to_rgb: np.ndarray,
    white_xyz: np.ndarray,
    precision: int,
    verbose: bool,
) -> list[str]:
    lines = [f"{INFO_PREFIX}{label}: {space.name}"]
    if verbose:
        points = [("r", space.red), ("g", space.green), ("b", space.blue), ("whitepoint", space.whitepoint)]
        lines.append(f"{INFO_PREFIX}  XY")
        for name, point in points:
            lines.append(f"{INFO_PREFIX}    {name}: {format_vector(point.as_array(), precision)}")
        lines.append(f"{INFO_PREFIX}  XYZ")
        for name, point in points[:3]:
            lines.append(f"{INFO_PREFIX}    {name}: {format_vector(xy_to_xyz(point), precision)}")
        lines.append(f"{INFO_PREFIX}    whitepoint: {format_vector(white_xyz, precision)}")
    lines.append(f"{INFO_PREFIX}  RGB XYZ")
    lines.extend(format_matrix("    matrix: ", rgb_to_xyz, precision))
    lines.append(f"{INFO_PREFIX}  XYZ RGB")
    lines.extend(format_matrix("    matrix: ", xyz_to_rgb, precision))
    return lines


def render_colorspace_report(result: ColorspaceTransform, precision: int = 6, verbose: bool = False) -> list[str]:
    lines = _colorspace_block(
        "input colorspace",
        result.input_space,
        result.input_xyz,
        result.input_xyz_to_rgb,
        result.input_whitepoint_xyz,
        precision,
        verbose,
    )
    lines.extend(
        _colorspace_block(
            "output colorspace",
            result.output_space,
            result.output_xyz,
            result.output_xyz_to_rgb,
            result.output_whitepoint_xyz,
            precision,
            verbose,
        )
    )
    lines.append(f"{INFO_PREFIX}whitepoint adaptation: {result.method.label}")
    lines.extend(format_matrix("    matrix: ", result.adaptation, precision))
    if verbose:
        for label, space, white_xyz in (
            ("input colorspace", result.input_space, result.input_whitepoint_xyz),
            ("output colorspace", result.output_space, result.output_whitepoint_xyz),
        ):
            lines.append(f"{INFO_PREFIX}{label}: {space.name}")
            lines.append(f"{INFO_PREFIX}    whitepoint: {format_vector(space.whitepoint.as_array(), precision)}")
            lines.append(f"{INFO_PREFIX}    whitepoint xyz: {format_vector(white_xyz, precision)}")
    lines.append(f"{INFO_PREFIX}input to output transformation")
    lines.extend(format_matrix("    matrix: ", result.transform, precision))
    return lines


def render_adaptation_report(result: IlluminantAdaptation, precision: int = 6, verbose: bool = False) -> list[str]:
    lines: list[str] = []
    for label, illuminant, white_xyz in (
        ("input illuminant", result.input_illuminant, result.input_whitepoint_xyz),
        ("output illuminant", result.output_illuminant, result.output_whitepoint_xyz),
    ):
        lines.append(f"{INFO_PREFIX}{label}: {illuminant.name}")
        if verbose and illuminant.description:
            lines.append(f"{INFO_PREFIX}    description: {illuminant.description}")
        lines.append(f"{INFO_PREFIX}    whitepoint: {format_vector(illuminant.whitepoint.as_array(), precision)}")
        lines.append(f"{INFO_PREFIX}    whitepoint xyz: {format_vector(white_xyz, precision)}")
    lines.append(f"{INFO_PREFIX}whitepoint adaptation: {result.method.label}")
    lines.extend(format_matrix("    matrix: ", result.adaptation, precision))
    return lines
