from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from PIL import Image

from plotframe.drawarea import new_draw_area
from plotframe.errors import BackendError, UnsupportedFormatError
from plotframe.geometry import Point
from plotframe.plot import Plot
from plotframe.plotter import GlyphBox
from plotframe.raster import RasterCanvas
from plotframe.save import (
    EpsBackend,
    JpegBackend,
    PdfBackend,
    PngBackend,
    SvgBackend,
    backend_for,
    open_surface,
)
from plotframe.style import GlyphStyle
from plotframe.vector import SvgCanvas


class MarkerPlotter:
    """Draws a glyph at each data point."""

    def __init__(self, pts: list[tuple[float, float]]) -> None:
        self.pts = pts
        self.style = GlyphStyle()

    def plot(self, area, plt) -> None:
        fx, fy = plt.transforms(area)
        for x, y in self.pts:
            area.draw_glyph(self.style, Point(fx(x), fy(y)))

    def data_range(self):
        xs = [p[0] for p in self.pts]
        ys = [p[1] for p in self.pts]
        return min(xs), max(xs), min(ys), max(ys)

    def glyph_boxes(self, plt) -> list[GlyphBox]:
        return [GlyphBox(x=plt.x.norm(x), y=plt.y.norm(y), rect=self.style.rect()) for x, y in self.pts]


def _sample_plot() -> Plot:
    plt = Plot()
    plt.title.text = "Sample"
    plt.x.label.text = "X"
    plt.y.label.text = "Y"
    plt.add(MarkerPlotter([(0.0, 0.0), (1.0, 2.0), (2.0, 1.0)]))
    plt.legend.add("points")
    return plt


class BackendSelectionTests(unittest.TestCase):
    def test_extension_picks_backend(self) -> None:
        cases = {
            "out.png": PngBackend,
            "out.jpg": JpegBackend,
            "out.jpeg": JpegBackend,
            "out.pdf": PdfBackend,
            "out.eps": EpsBackend,
            "out.svg": SvgBackend,
        }
        for name, cls in cases.items():
            self.assertIsInstance(backend_for(name), cls, name)

    def test_extension_is_case_insensitive(self) -> None:
        self.assertIsInstance(backend_for("OUT.PNG"), PngBackend)
        self.assertIsInstance(backend_for(Path("dir") / "plot.Svg"), SvgBackend)

    def test_unknown_extension(self) -> None:
        with self.assertRaises(UnsupportedFormatError):
            backend_for("plot.bmp")
        with self.assertRaises(ValueError):
            backend_for("plot")

    def test_backend_rejects_foreign_surface(self) -> None:
        with self.assertRaises(BackendError):
            backend_for("a.png").finalize(SvgCanvas(10, 10), "unused.png")
        with self.assertRaises(BackendError):
            backend_for("a.svg").finalize(RasterCanvas(10, 10), "unused.svg")

    def test_backend_surfaces(self) -> None:
        self.assertIsInstance(backend_for("a.png", dpi=144).new_surface(72, 72), RasterCanvas)
        self.assertEqual(backend_for("a.png", dpi=144).new_surface(72, 72).pixel_size, (144, 144))
        self.assertIsInstance(backend_for("a.svg").new_surface(72, 72), SvgCanvas)


class SaveTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_png_size_in_inches_at_default_dpi(self) -> None:
        path = self.tmp / "plot.png"
        with self.assertLogs("plotframe.save", level="INFO"):
            _sample_plot().save(2, 1.5, path)
        with Image.open(path) as image:
            self.assertEqual(image.size, (192, 144))
            self.assertEqual(image.format, "PNG")

    def test_png_respects_dpi(self) -> None:
        path = self.tmp / "plot.PNG"
        _sample_plot().save(1, 1, path, dpi=50)
        with Image.open(path) as image:
            self.assertEqual(image.size, (50, 50))

    def test_every_format_writes_a_file(self) -> None:
        for ext, fmt in [(".jpg", "JPEG"), (".jpeg", "JPEG"), (".pdf", None), (".eps", None), (".svg", None)]:
            path = self.tmp / f"plot{ext}"
            _sample_plot().save(2, 2, path, dpi=36)
            self.assertTrue(path.exists(), ext)
            self.assertGreater(path.stat().st_size, 0, ext)
            if fmt:
                with Image.open(path) as image:
                    self.assertEqual(image.format, fmt)

    def test_svg_output_is_text(self) -> None:
        path = self.tmp / "plot.svg"
        _sample_plot().save(3, 2, path)
        content = path.read_text(encoding="utf-8")
        self.assertIn("<svg", content)
        self.assertIn('width="216pt"', content)
        self.assertIn(">Sample</", content)

    def test_unsupported_format_writes_nothing(self) -> None:
        path = self.tmp / "plot.bmp"
        with self.assertRaises(UnsupportedFormatError):
            _sample_plot().save(1, 1, path)
        self.assertFalse(path.exists())

    def test_zero_size_raises_backend_error(self) -> None:
        path = self.tmp / "plot.png"
        with self.assertRaises(BackendError):
            _sample_plot().save(0, 1, path)
        self.assertFalse(path.exists())

    def test_missing_directory_raises_backend_error(self) -> None:
        with self.assertRaises(BackendError):
            _sample_plot().save(1, 1, self.tmp / "missing" / "plot.png")
        with self.assertRaises(BackendError):
            _sample_plot().save(1, 1, self.tmp / "missing" / "plot.svg")

    def test_drawing_error_still_writes_file(self) -> None:
        path = self.tmp / "partial.png"
        with self.assertRaises(RuntimeError):
            with open_surface(path, 72, 72) as surface:
                surface.set_color((255, 0, 0, 255))
                raise RuntimeError("boom")
        self.assertTrue(path.exists())

    def test_drawing_error_wins_over_write_error(self) -> None:
        path = self.tmp / "missing" / "partial.png"
        with self.assertLogs("plotframe.save", level="WARNING"):
            with self.assertRaisesRegex(RuntimeError, "boom"):
                with open_surface(path, 72, 72):
                    raise RuntimeError("boom")

    def test_glyph_boxes_keep_markers_inside(self) -> None:
        plt = _sample_plot()
        data = plt.draw(new_draw_area(SvgCanvas(300, 200)))
        fx, fy = plt.transforms(data)
        r = plt.plotters()[0].style.radius
        self.assertLessEqual(fx(2.0) + r, 300.0 + 1e-9)
        self.assertLessEqual(fy(2.0) + r, 200.0 + 1e-9)


if __name__ == "__main__":
    unittest.main()
