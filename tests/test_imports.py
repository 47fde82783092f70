import gammaconv
from gammaconv import io, conv2d, core
from gammaconv.core import PixelBuffer, GammaTable, default_gamma_table
from gammaconv.conv2d import ConvolutionOp, SeparableConvolver, make_gaussian_kernel


def test_public_api_exports():
    assert isinstance(gammaconv.__version__, str)
    assert gammaconv.blur is conv2d.blur
    assert gammaconv.PixelBuffer is PixelBuffer
    assert callable(io.read_image)
    assert core.GAMMA == 2.2
    assert isinstance(default_gamma_table(), GammaTable)
    assert ConvolutionOp and SeparableConvolver and make_gaussian_kernel


def test_module_diagnostics(capsys):
    from gammaconv.__main__ import _diagnostics

    _diagnostics()
    out = capsys.readouterr().out
    assert "mismatches over 0..255: 0" in out
    assert "unchanged: True" in out
