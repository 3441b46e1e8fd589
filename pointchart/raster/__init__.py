from .canvas import blend_mask, blend_rgba, draw_hline, draw_vline, fill, new_canvas
from .draw_lines import draw_line
from .draw_markers import draw_marker
from .draw_shapes import fill_polygon, fill_rect, fill_rect_gradient, fill_round_rect
from .draw_text import draw_text, load_font, text_bounds, text_mask

__all__ = [
    "blend_mask",
    "blend_rgba",
    "draw_hline",
    "draw_line",
    "draw_marker",
    "draw_text",
    "draw_vline",
    "fill",
    "fill_polygon",
    "fill_rect",
    "fill_rect_gradient",
    "fill_round_rect",
    "load_font",
    "new_canvas",
    "text_bounds",
    "text_mask",
]
