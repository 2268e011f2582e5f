from .svg import SvgCanvas

__all__ = ["SvgCanvas"]
