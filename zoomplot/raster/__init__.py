from .canvas import fill_rect, new_canvas, stroke_rect
from .draw_lines import draw_line_segment, draw_polyline
from .draw_text import draw_text, text_size
from .host import RasterHost, RasterPainter, RasterSurface

__all__ = [
    "RasterHost",
    "RasterPainter",
    "RasterSurface",
    "draw_line_segment",
    "draw_polyline",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "stroke_rect",
    "text_size",
]
