from __future__ import annotations

import json

import numpy as np
import pytest

from colortool import app_api
from colortool.color.adaptation import AdaptationMethod
from colortool.errors import NotFoundError
from colortool.registry import load_registry


@pytest.fixture(scope="module")
def registry():
    return load_registry()


def test_identical_spaces_give_identity(registry) -> None:
    result = app_api.compute_colorspace_transform(registry, "sRGB", "sRGB", AdaptationMethod.XYZ_SCALING)
    assert np.max(np.abs(result.transform - np.eye(3))) < 1e-9
    assert np.allclose(result.adaptation, np.eye(3), atol=1e-12)


def test_srgb_and_rec709_share_primaries(registry) -> None:
    result = app_api.compute_colorspace_transform(registry, "sRGB", "Rec709", AdaptationMethod.BRADFORD)
    assert np.allclose(result.transform, np.eye(3), atol=1e-9)


@pytest.mark.parametrize(
    "src,dst",
    [("ACES2065-1", "ARRIWideGamut3"), ("DCI-P3", "DisplayP3"), ("ProPhotoRGB", "sRGB"), ("ACEScg", "Rec2020")],
)
def test_white_maps_to_white(registry, src: str, dst: str) -> None:
    for method in AdaptationMethod:
        result = app_api.compute_colorspace_transform(registry, src, dst, method)
        assert np.allclose(result.transform @ np.ones(3), np.ones(3), atol=1e-9)
        assert np.allclose(result.adaptation @ result.input_whitepoint_xyz, result.output_whitepoint_xyz, atol=1e-9)


def test_transform_composes_documented_chain(registry) -> None:
    result = app_api.compute_colorspace_transform(registry, "ACES2065-1", "ARRIWideGamut3", AdaptationMethod.BRADFORD)
    expected = np.linalg.inv(result.output_xyz) @ result.adaptation @ result.input_xyz
    assert np.allclose(result.transform, expected, atol=1e-12)
    assert np.allclose(result.input_xyz_to_rgb @ result.input_xyz, np.eye(3), atol=1e-9)


def test_unknown_space_raises_not_found(registry) -> None:
    with pytest.raises(NotFoundError, match="unknown colorspace: Nope"):
        app_api.compute_colorspace_transform(registry, "sRGB", "Nope")


def test_illuminant_adaptation(registry) -> None:
    result = app_api.compute_illuminant_adaptation(registry, "D65", "D50", AdaptationMethod.BRADFORD)
    assert result.input_illuminant.name == "D65"
    assert result.method is AdaptationMethod.BRADFORD
    assert np.allclose(result.adaptation @ result.input_whitepoint_xyz, result.output_whitepoint_xyz, atol=1e-9)
    # Published Bradford D65 -> D50 matrix, derived from slightly different white XYZ.
    expected = np.array(
        [
            [1.0478, 0.0229, -0.0501],
            [0.0295, 0.9905, -0.0171],
            [-0.0092, 0.0151, 0.7521],
        ],
        dtype=np.float64,
    )
    assert np.allclose(result.adaptation, expected, atol=2e-3)


def test_unknown_illuminant_raises_not_found(registry) -> None:
    with pytest.raises(NotFoundError):
        app_api.compute_illuminant_adaptation(registry, "D65", "D93")


def test_json_payload_is_serializable(registry) -> None:
    result = app_api.compute_colorspace_transform(registry, "sRGB", "Rec2020", AdaptationMethod.CAT02)
    payload = json.loads(json.dumps(result.to_json_dict()))
    assert payload["adaptation_method"] == "CAT02"
    assert payload["input_colorspace"] == "sRGB"
    assert len(payload["transform"]) == 3
    assert all(len(row) == 3 for row in payload["transform"])

    adapt = app_api.compute_illuminant_adaptation(registry, "A", "D65", AdaptationMethod.VON_KRIES)
    payload = json.loads(json.dumps(adapt.to_json_dict()))
    assert payload["adaptation_method"] == "VonKries"
    assert payload["input_whitepoint_xyz"][1] == 1.0
