# tests/test_cli.py
import json
from pathlib import Path

import numpy as np
import pytest
from click.testing import CliRunner

from gammaconv.cli import image_demo
from gammaconv.cli.gammaconv_cli import main, parse_kernel_spec
from gammaconv.cli.settings import (
    load_settings,
    save_settings,
    select_settings,
    strip_settings_args,
)
from gammaconv.core import PreconditionViolation
from gammaconv.io import read_image


# ---------------------------------------------------------------------------
# Kernel specs
# ---------------------------------------------------------------------------

def test_parse_kernel_spec_variants():
    assert len(parse_kernel_spec("gaussian:radius=1.0")) == 7
    assert len(parse_kernel_spec("gaussian:σ=1.0")) == 7
    assert len(parse_kernel_spec("box:radius=2")) == 5
    k = parse_kernel_spec("0.25, 0.5, 0.25")
    assert list(k) == [0.25, 0.5, 0.25]


@pytest.mark.parametrize(
    "spec",
    ["", "gaussian", "box:radius=1.5", "gaussian:radius=-2", "0.5,0.5", "a,b,c", "sobel:radius=1"],
)
def test_parse_kernel_spec_rejects(spec):
    with pytest.raises(PreconditionViolation):
        parse_kernel_spec(spec)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_strip_settings_args():
    cleaned, load, save = strip_settings_args(
        ["blur", "a.png", "--settings=s.json", "b.png", "--save-settings", "o.csv"]
    )
    assert cleaned == ["blur", "a.png", "b.png"]
    assert load == "s.json"
    assert save == "o.csv"
    with pytest.raises(SystemExit):
        strip_settings_args(["--settings"])


def test_settings_sections(tmp_path: Path):
    path = tmp_path / "settings.json"
    save_settings(path, {"radius": 1.0})
    save_settings(path, {"radius": 3.0, "brightness": 2.0}, command="glow")
    data = load_settings(path)
    assert data == {"default": {"radius": 1.0}, "glow": {"brightness": 2.0, "radius": 3.0}}
    assert select_settings(data, "glow")["radius"] == 3.0
    assert select_settings(data, "blur") == {"radius": 1.0}


def test_settings_csv_roundtrip(tmp_path: Path):
    path = tmp_path / "settings.csv"
    save_settings(path, {"radius": 2.5, "workers": 2})
    assert load_settings(path) == {"radius": 2.5, "workers": 2}
    with pytest.raises(SystemExit):
        load_settings(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def test_blur_command(test_assets_dir: Path, tmp_path: Path):
    src = test_assets_dir / "img_gradients.png"
    out = tmp_path / "blur.png"
    assert main(["blur", str(src), str(out), "--radius", "1.5", "--workers", "2"]) == 0
    a, b = read_image(src), read_image(out)
    assert (b.width, b.height, b.channels) == (a.width, a.height, a.channels)


def test_glow_and_convolve_commands(test_assets_dir: Path, tmp_path: Path):
    src = test_assets_dir / "img_checker.png"
    assert main(["glow", str(src), str(tmp_path / "g.png"), "--brightness", "2"]) == 0
    assert main(
        ["convolve", str(src), str(tmp_path / "c.png"), "--kernel", "1,2,1", "--normalize"]
    ) == 0
    assert (tmp_path / "g.png").exists()
    assert (tmp_path / "c.png").exists()


def test_shadow_command(test_assets_dir: Path, tmp_path: Path):
    out = tmp_path / "shadow.png"
    assert main(["shadow", str(test_assets_dir / "img_sprite.png"), str(out)]) == 0
    shadow = read_image(out)
    assert shadow.channels == 4
    assert (shadow.as_array()[..., 1:] == 0).all()


def test_errors_return_status(test_assets_dir: Path, tmp_path: Path, capsys):
    # no alpha channel
    rc = main(["shadow", str(test_assets_dir / "img_checker.png"), str(tmp_path / "x.png")])
    assert rc == 2
    # even kernel
    rc = main(["convolve", str(test_assets_dir / "img_checker.png"), str(tmp_path / "y.png"), "--kernel", "0.5,0.5"])
    assert rc == 2
    # missing input
    rc = main(["blur", str(tmp_path / "missing.png"), str(tmp_path / "z.png")])
    assert rc == 1
    assert "gammaconv: error:" in capsys.readouterr().err


def test_settings_file_drives_options(test_assets_dir: Path, tmp_path: Path):
    settings = tmp_path / "opts.json"
    settings.write_text(json.dumps({"blur": {"radius": 0.0}}), encoding="utf-8")
    src = test_assets_dir / "img_gradients.png"
    out = tmp_path / "same.png"
    saved = tmp_path / "saved.json"

    rc = main(["--settings", str(settings), "--save-settings", str(saved), "blur", str(src), str(out)])
    assert rc == 0
    # radius 0 is the identity kernel
    assert read_image(out) == read_image(src)
    assert json.loads(saved.read_text(encoding="utf-8"))["blur"]["radius"] == 0.0


def test_image_demo_writes_sweep(test_assets_dir: Path, tmp_path: Path):
    runner = CliRunner()
    out_dir = tmp_path / "demo"
    result = runner.invoke(
        image_demo.main,
        [str(test_assets_dir / "img_sprite.png"), str(out_dir), "--radius", "1", "--radius", "2.5"],
    )
    assert result.exit_code == 0, result.output
    names = sorted(p.name for p in out_dir.iterdir())
    assert names == sorted(
        f"img_sprite_{fx}_r{r}.png" for fx in ("blur", "glow", "shadow") for r in ("1", "2.5")
    )
    assert np.all([(out_dir / n).stat().st_size > 0 for n in names])
