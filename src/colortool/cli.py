from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
import sys

from colortool.color.adaptation import AdaptationMethod
from colortool.config import ToolConfig, load_config
from colortool.errors import ColorToolError
from colortool.registry import Registry, load_colorspaces, load_illuminants, load_registry
from colortool.utils.logging_utils import configure_logging


logger = logging.getLogger(__name__)

_METHOD_CHOICES = [m.value for m in AdaptationMethod]


def _adaptation_method_arg(value: str) -> AdaptationMethod:
    try:
        return AdaptationMethod.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _precision_arg(value: str) -> int:
    try:
        precision = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid precision: {value!r}") from exc
    if not 0 <= precision <= 17:
        raise argparse.ArgumentTypeError(f"precision must be between 0 and 17, got {precision}")
    return precision


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Path to YAML tool config")
    p.add_argument("--colorspaces-file", default=None, help="Color space table (JSON or YAML)")
    p.add_argument("--illuminants-file", default=None, help="Illuminant table (JSON or YAML)")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose status messages")
    p.add_argument("--log-level", default=None, help="Logging level (default: WARNING)")
    p.add_argument("--json", action="store_true", help="Emit machine-readable JSON")


def _add_matrix_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--adaptation-method",
        type=_adaptation_method_arg,
        default=None,
        metavar="METHOD",
        help=f"Adaptation method: {', '.join(_METHOD_CHOICES)} (default: bradford)",
    )
    p.add_argument("--precision", type=_precision_arg, default=None, help="Decimal places in printed matrices (default: 6)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colortool",
        description="A utility set for color space conversions, with support for white point adaptation",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    colorspaces = sub.add_parser("colorspaces", help="List all colorspaces")
    _add_common_args(colorspaces)

    illuminants = sub.add_parser("illuminants", help="List all illuminants")
    _add_common_args(illuminants)

    transform = sub.add_parser("transform", help="Compute the input to output colorspace transform")
    transform.add_argument("input_colorspace", help="Input color space")
    transform.add_argument("output_colorspace", help="Output color space")
    _add_common_args(transform)
    _add_matrix_args(transform)

    adapt = sub.add_parser("adapt", help="Compute the white point adaptation between two illuminants")
    adapt.add_argument("input_illuminant", help="Input illuminant")
    adapt.add_argument("output_illuminant", help="Output illuminant")
    _add_common_args(adapt)
    _add_matrix_args(adapt)

    return parser


def _resolve_config(args: argparse.Namespace) -> ToolConfig:
    config = load_config(args.config)
    overrides: dict[str, object] = {}
    if args.colorspaces_file:
        overrides["colorspaces_path"] = Path(args.colorspaces_file).expanduser().resolve()
    if args.illuminants_file:
        overrides["illuminants_path"] = Path(args.illuminants_file).expanduser().resolve()
    if args.verbose:
        overrides["verbose"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    if getattr(args, "adaptation_method", None) is not None:
        overrides["adaptation_method"] = args.adaptation_method
    if getattr(args, "precision", None) is not None:
        overrides["precision"] = args.precision
    return dataclasses.replace(config, **overrides)


def _cmd_colorspaces(args: argparse.Namespace, config: ToolConfig) -> int:
    spaces = load_colorspaces(config.colorspaces_path)

    if args.json:
        payload = {
            name: {"description": cs.description, "transfer": cs.transfer}
            for name, cs in sorted(spaces.items())
        }
        print(json.dumps(payload, indent=2))
        return 0

    print("info: Colorspaces:")
    for name in sorted(spaces):
        cs = spaces[name]
        if config.verbose and cs.description:
            print(f"info:     {name} - {cs.description}")
        else:
            print(f"info:     {name}")
    return 0


def _cmd_illuminants(args: argparse.Namespace, config: ToolConfig) -> int:
    illuminants = load_illuminants(config.illuminants_path)

    if args.json:
        payload = {
            name: {"description": ill.description, "whitepoint": [ill.whitepoint.x, ill.whitepoint.y]}
            for name, ill in sorted(illuminants.items())
        }
        print(json.dumps(payload, indent=2))
        return 0

    print("info: Illuminants:")
    for name in sorted(illuminants):
        ill = illuminants[name]
        if config.verbose and ill.description:
            print(f"info:     {name} - {ill.description}")
        else:
            print(f"info:     {name}")
    return 0


def _load_registry(config: ToolConfig) -> Registry:
    return load_registry(config.colorspaces_path, config.illuminants_path)


def _cmd_transform(args: argparse.Namespace, config: ToolConfig) -> int:
    from colortool.app_api import compute_colorspace_transform
    from colortool.utils.formatting import render_colorspace_report

    registry = _load_registry(config)
    result = compute_colorspace_transform(
        registry,
        args.input_colorspace,
        args.output_colorspace,
        config.adaptation_method,
    )

    if args.json:
        print(json.dumps(result.to_json_dict(), indent=2))
        return 0

    print("info: colortool -- a utility set for color space conversions, with support for white point adaptation.")
    for line in render_colorspace_report(result, precision=config.precision, verbose=config.verbose):
        print(line)
    return 0


def _cmd_adapt(args: argparse.Namespace, config: ToolConfig) -> int:
    from colortool.app_api import compute_illuminant_adaptation
    from colortool.utils.formatting import render_adaptation_report

    registry = _load_registry(config)
    result = compute_illuminant_adaptation(
        registry,
        args.input_illuminant,
        args.output_illuminant,
        config.adaptation_method,
    )

    if args.json:
        print(json.dumps(result.to_json_dict(), indent=2))
        return 0

    for line in render_adaptation_report(result, precision=config.precision, verbose=config.verbose):
        print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
        configure_logging(config.log_level, config.log_file)

        if args.command == "colorspaces":
            return _cmd_colorspaces(args, config)
        if args.command == "illuminants":
            return _cmd_illuminants(args, config)
        if args.command == "transform":
            return _cmd_transform(args, config)
        if args.command == "adapt":
            return _cmd_adapt(args, config)

        parser.error(f"unknown command: {args.command}")
        return 2
    except ColorToolError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
