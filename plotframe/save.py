from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Iterator

from PIL import Image

from plotframe.errors import BackendError, UnsupportedFormatError
from plotframe.geometry import Length
from plotframe.raster import DEFAULT_DPI, RasterCanvas
from plotframe.surface import Surface
from plotframe.vector import SvgCanvas


LOGGER = logging.getLogger(__name__)


class OutputBackend(ABC):
    """Creates a surface for a file format and writes it out once drawn."""

    def __init__(self, *, dpi: float = DEFAULT_DPI) -> None:
        self.dpi = float(dpi)

    @abstractmethod
    def new_surface(self, width: Length, height: Length) -> Surface:
        raise NotImplementedError

    @abstractmethod
    def finalize(self, surface: Surface, path: str | Path) -> None:
        raise NotImplementedError


class RasterBackend(OutputBackend):
    image_format = ""

    def new_surface(self, width: Length, height: Length) -> RasterCanvas:
        return RasterCanvas(width, height, dpi=self.dpi)

    def encode(self, surface: RasterCanvas) -> Image.Image:
        return surface.to_rgb_image()

    def save_options(self) -> dict[str, object]:
        return {}

    def finalize(self, surface: Surface, path: str | Path) -> None:
        if not isinstance(surface, RasterCanvas):
            raise BackendError(f"{type(self).__name__} cannot encode a {type(surface).__name__}")
        image = self.encode(surface)
        try:
            image.save(str(path), format=self.image_format, **self.save_options())
        except (OSError, ValueError) as exc:
            raise BackendError(f"cannot write {self.image_format} image to {path}") from exc


class PngBackend(RasterBackend):
    image_format = "PNG"

    def encode(self, surface: RasterCanvas) -> Image.Image:
        return surface.to_image()

    def save_options(self) -> dict[str, object]:
        return {"dpi": (self.dpi, self.dpi)}


class JpegBackend(RasterBackend):
    image_format = "JPEG"

    def save_options(self) -> dict[str, object]:
        return {"quality": 95, "dpi": (self.dpi, self.dpi)}


class PdfBackend(RasterBackend):
    image_format = "PDF"

    def save_options(self) -> dict[str, object]:
        return {"resolution": self.dpi}


class EpsBackend(RasterBackend):
    image_format = "EPS"


class SvgBackend(OutputBackend):
    def new_surface(self, width: Length, height: Length) -> SvgCanvas:
        return SvgCanvas(width, height)

    def finalize(self, surface: Surface, path: str | Path) -> None:
        if not isinstance(surface, SvgCanvas):
            raise BackendError(f"SvgBackend cannot write a {type(surface).__name__}")
        try:
            surface.save(path)
        except OSError as exc:
            raise BackendError(f"cannot write SVG to {path}") from exc


BACKENDS: dict[str, type[OutputBackend]] = {
    ".eps": EpsBackend,
    ".jpeg": JpegBackend,
    ".jpg": JpegBackend,
    ".pdf": PdfBackend,
    ".png": PngBackend,
    ".svg": SvgBackend,
}


def backend_for(path: str | Path, *, dpi: float = DEFAULT_DPI) -> OutputBackend:
    """Pick the backend from the file extension, ignoring case."""
    ext = Path(path).suffix.lower()
    backend_cls = BACKENDS.get(ext)
    if backend_cls is None:
        raise UnsupportedFormatError(f"unsupported file extension: {ext or '(none)'}")
    return backend_cls(dpi=dpi)


@contextmanager
def open_surface(path: str | Path, width: Length, height: Length, *, dpi: float = DEFAULT_DPI) -> Iterator[Surface]:
    """Yield a surface for ``path`` and write it out when the block exits.

    The file is written on every exit path. When the block raises, that
    error propagates and a failure to write is only logged.
    """
    backend = backend_for(path, dpi=dpi)
    surface = backend.new_surface(width, height)
    try:
        yield surface
    except BaseException:
        try:
            backend.finalize(surface, path)
        except Exception:
            LOGGER.warning("could not write %s after a drawing error", path, exc_info=True)
        raise
    backend.finalize(surface, path)
    LOGGER.info("saved plot to %s (%s)", path, type(backend).__name__)
