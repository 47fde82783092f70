from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, Optional

from gammaconv import __version__
from gammaconv.cli.settings import (
    add_settings_args,
    strip_settings_args,
    detect_command,
    load_settings,
    select_settings,
    apply_settings_to_parser,
    serialize_args,
    save_settings,
    find_subparser,
)
from gammaconv.conv2d import (
    Kernel,
    apply_convolution,
    blur,
    glow,
    make_box_kernel,
    make_gaussian_kernel,
    make_shadow,
)
from gammaconv.core.errors import GammaconvError, PreconditionViolation
from gammaconv.io import read_image, write_image
from gammaconv.utils.logging import get_logger, set_verbosity

logger = get_logger()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _path(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


def parse_kernel_spec(spec: str) -> Kernel:
    """
    Parse strings like:
        "gaussian:radius=2.0"
        "gaussian:sigma=2.0"
        "box:radius=3"
        "0.25,0.5,0.25"
    and return the matching 1D kernel.
    """
    if not spec or not spec.strip():
        raise PreconditionViolation("Empty kernel spec.")

    kind, sep, param_str = spec.partition(":")
    kind = kind.strip().lower()

    if not sep and kind not in ("gaussian", "box"):
        # Plain weight list.
        try:
            weights = [float(v) for v in spec.split(",") if v.strip()]
        except ValueError as exc:
            raise PreconditionViolation(f"Invalid kernel weights {spec!r}: {exc}") from exc
        return Kernel(weights)

    params: Dict[str, str] = {}
    for item in param_str.split(","):
        key, eq, val = item.partition("=")
        if eq:
            params[key.strip().lower().replace("σ", "sigma")] = val.strip()

    radius_str = params.get("radius", params.get("sigma"))
    if radius_str is None:
        raise PreconditionViolation(f"Kernel {kind!r} requires 'radius' (e.g. '{kind}:radius=2').")

    try:
        if kind == "gaussian":
            return make_gaussian_kernel(float(radius_str))
        if kind == "box":
            return make_box_kernel(int(radius_str))
    except ValueError as exc:
        if isinstance(exc, GammaconvError):
            raise
        raise PreconditionViolation(f"Invalid radius {radius_str!r}: {exc}") from exc

    raise PreconditionViolation(f"Unsupported kernel kind {kind!r}; expected 'gaussian' or 'box'.")


# ---------------------------------------------------------------------------
# Subcommand implementations
# ---------------------------------------------------------------------------

def _cmd_blur(args: argparse.Namespace) -> int:
    src = read_image(_path(args.in_path))
    out = blur(src, args.radius, workers=args.workers)
    write_image(_path(args.out_path), out)
    logger.info("Wrote blurred image → %s", args.out_path)
    return 0


def _cmd_glow(args: argparse.Namespace) -> int:
    src = read_image(_path(args.in_path))
    out = glow(src, args.brightness, args.radius, workers=args.workers)
    write_image(_path(args.out_path), out)
    logger.info("Wrote glow image → %s", args.out_path)
    return 0


def _cmd_shadow(args: argparse.Namespace) -> int:
    src = read_image(_path(args.in_path))
    if src.channels != 4:
        raise PreconditionViolation(
            f"{args.in_path} has no alpha channel; a shadow needs a transparent image."
        )
    out = make_shadow(src, args.radius, args.darkness)
    write_image(_path(args.out_path), out)
    logger.info("Wrote shadow → %s", args.out_path)
    return 0


def _cmd_convolve(args: argparse.Namespace) -> int:
    kernel = parse_kernel_spec(args.kernel)
    if args.normalize:
        kernel = kernel.normalized()
    src = read_image(_path(args.in_path))
    out = apply_convolution(src, kernel, args.brightness, workers=args.workers)
    write_image(_path(args.out_path), out)
    logger.info("Wrote convolved image (%d taps) → %s", len(kernel), args.out_path)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _add_io_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("in_path", help="Input image (PNG/JPEG...).")
    p.add_argument("out_path", help="Output image path; use PNG to keep alpha.")


def _add_workers_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads per convolution pass (rows are split into bands).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gammaconv",
        description="Gamma-correct, alpha-weighted blur, glow and drop shadows.",
    )
    parser.add_argument("--version", action="version", version=f"gammaconv {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    add_settings_args(parser)

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- blur ----
    p_blur = subparsers.add_parser("blur", help="Gaussian blur.")
    _add_io_args(p_blur)
    p_blur.add_argument("--radius", type=float, default=2.0, help="Blur radius (one sigma), px.")
    _add_workers_arg(p_blur)
    p_blur.set_defaults(func=_cmd_blur)

    # ---- glow ----
    p_glow = subparsers.add_parser("glow", help="Brighten and blur, clipping to white.")
    _add_io_args(p_glow)
    p_glow.add_argument("--radius", type=float, default=2.0, help="Blur radius (one sigma), px.")
    p_glow.add_argument(
        "--brightness",
        type=float,
        default=1.5,
        help="Brightening factor; 1.0 behaves like blur.",
    )
    _add_workers_arg(p_glow)
    p_glow.set_defaults(func=_cmd_glow)

    # ---- shadow ----
    p_shadow = subparsers.add_parser("shadow", help="Drop shadow from the alpha channel.")
    _add_io_args(p_shadow)
    p_shadow.add_argument("--radius", type=float, default=4.0, help="Shadow blur radius, px.")
    p_shadow.add_argument(
        "--darkness",
        type=float,
        default=0.6,
        help="0.0 is no shadow, 1.0 the darkest.",
    )
    p_shadow.set_defaults(func=_cmd_shadow)

    # ---- convolve ----
    p_conv = subparsers.add_parser("convolve", help="Convolve with a custom separable kernel.")
    _add_io_args(p_conv)
    p_conv.add_argument(
        "--kernel",
        metavar="SPEC",
        required=True,
        help=(
            "Kernel spec, e.g. 'gaussian:radius=2.0', 'box:radius=3' "
            "or a weight list '0.25,0.5,0.25'."
        ),
    )
    p_conv.add_argument("--brightness", type=float, default=1.0, help="Color brightening factor.")
    p_conv.add_argument(
        "--normalize",
        action="store_true",
        help="Rescale the kernel weights to sum to 1.",
    )
    _add_workers_arg(p_conv)
    p_conv.set_defaults(func=_cmd_convolve)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    cleaned_argv, settings_path, save_path = strip_settings_args(raw_argv)
    command = detect_command(cleaned_argv)

    if settings_path:
        settings_data = load_settings(Path(settings_path))
        settings = select_settings(settings_data, command)
        target = find_subparser(parser, command) or parser
        apply_settings_to_parser(target, settings)

    args = parser.parse_args(cleaned_argv)
    set_verbosity(args.verbose)

    if save_path:
        target = find_subparser(parser, args.command) or parser
        settings_out = serialize_args(args, target, exclude={"command", "func"})
        save_settings(Path(save_path), settings_out, command=args.command)
        logger.info("Saved settings for %r → %s", args.command, save_path)

    try:
        return args.func(args)
    except GammaconvError as exc:
        print(f"gammaconv: error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"gammaconv: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
