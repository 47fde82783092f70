# src/gammaconv/cli/image_demo.py
"""Command-line demo: blur / glow / shadow sweep of one image.
Usage:
    python -m gammaconv.cli.image_demo INPUT_PATH OUTPUT_DIR [--radius R ...] [OPTIONS...]
Saves results to OUTPUT_DIR/<base>_<effect>_r<radius>.png.
"""
import os

import click

from gammaconv.conv2d import blur, glow, make_shadow
from gammaconv.io import read_image, write_image
from gammaconv.utils.logging import set_verbosity


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_dir", type=click.Path(file_okay=False))
@click.option("--radius", "radii", multiple=True, type=float, default=(1.0, 3.0, 8.0), show_default=True, help="Blur radius; repeat for a sweep.")
@click.option("--brightness", default=1.8, type=float, show_default=True, help="Glow brightening factor.")
@click.option("--darkness", default=0.6, type=float, show_default=True, help="Shadow darkness (needs an alpha channel).")
@click.option("--workers", default=1, type=int, show_default=True)
@click.option("-v", "--verbose", count=True)
def main(input_path, output_dir, radii, brightness, darkness, workers, verbose):
    set_verbosity(verbose)

    img = read_image(input_path)
    os.makedirs(output_dir, exist_ok=True)
    base = os.path.splitext(os.path.basename(input_path))[0]

    for radius in radii:
        tag = f"r{radius:g}"

        # =============== BLUR ===============
        out_path = os.path.join(output_dir, f"{base}_blur_{tag}.png")
        write_image(out_path, blur(img, radius, workers=workers))
        click.echo(f"Saved blur → {out_path}")

        # =============== GLOW ===============
        out_path = os.path.join(output_dir, f"{base}_glow_{tag}.png")
        write_image(out_path, glow(img, brightness, radius, workers=workers))
        click.echo(f"Saved glow → {out_path}")

        # =============== SHADOW (alpha only) ===============
        if img.has_alpha:
            out_path = os.path.join(output_dir, f"{base}_shadow_{tag}.png")
            write_image(out_path, make_shadow(img, radius, darkness))
            click.echo(f"Saved shadow → {out_path}")

    click.echo(f"All results stored in: {output_dir}")


if __name__ == "__main__":
    main()
