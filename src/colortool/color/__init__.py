from .adaptation import AdaptationMethod, adaptation_matrix, cone_response_matrix
from .chromaticity import ChromaticityPoint, xy_to_xyz
from .primaries import colorspace_rgb_to_xyz, invert_matrix, rgb_to_xyz_matrix, xyz_to_rgb_matrix
from .transform import compose_transform

__all__ = [
    "AdaptationMethod",
    "ChromaticityPoint",
    "adaptation_matrix",
    "colorspace_rgb_to_xyz",
    "compose_transform",
    "cone_response_matrix",
    "invert_matrix",
    "rgb_to_xyz_matrix",
    "xy_to_xyz",
    "xyz_to_rgb_matrix",
]
