"""Lay out Sudoku grids on landscape PDF pages using project configuration."""

from __future__ import annotations

import datetime as _dt
import math
from pathlib import Path
from typing import Optional, Sequence

from project_config import get_section
from sudoku_grid import Grid


PDF_CONFIG = get_section("pdf", {})
LAYOUT_CONFIG = PDF_CONFIG.get("layout", {})
PAGE_CONFIG = PDF_CONFIG.get("page", {})
RENDER_CONFIG = PDF_CONFIG.get("rendering", {})


LAYOUT_ROWS = max(1, int(LAYOUT_CONFIG.get("rows", 2)))
LAYOUT_COLS = max(1, int(LAYOUT_CONFIG.get("cols", 3)))
PUZZLES_PER_PAGE = LAYOUT_ROWS * LAYOUT_COLS

DEFAULT_MARGIN_CM = float(PAGE_CONFIG.get("margin_cm", 2.0))
DEFAULT_GAP_CM = float(PAGE_CONFIG.get("gap_cm", 1.5))
PAGE_WIDTH_CM = float(PAGE_CONFIG.get("width_cm", 29.7))
PAGE_HEIGHT_CM = float(PAGE_CONFIG.get("height_cm", 21.0))
FOOTER_OFFSET_CM = float(PAGE_CONFIG.get("footer_offset_cm", 1.0))
FONT_SCALE = float(RENDER_CONFIG.get("font_scale_factor", 0.65))
OUTPUT_PREFIX = str(PDF_CONFIG.get("filename_prefix", "sudoku_pack"))

INCH_PER_CM = 0.3937007874


def resolve_output_path(out: Optional[str]) -> Path:
    if out:
        return Path(out)
    timestamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(f"{OUTPUT_PREFIX}_{timestamp}.pdf")


def page_count(total: int) -> int:
    return max(1, math.ceil(total / PUZZLES_PER_PAGE))


def render_pdf(
    grids: Sequence[Grid],
    out_path: str | Path,
    *,
    labels: Optional[Sequence[str]] = None,
    margin_cm: float = DEFAULT_MARGIN_CM,
    gap_cm: float = DEFAULT_GAP_CM,
    footer: str = "",
) -> Path:
    """Write ``grids`` to ``out_path``, filling pages row by row.

    ``labels`` (one per grid) are printed under each grid; ``footer`` at the
    bottom of every page. Returns the written path.
    """
    if not grids:
        raise ValueError("at least one grid is required")
    if labels is not None and len(labels) != len(grids):
        raise ValueError("labels must match grids one to one")

    from matplotlib.backends.backend_pdf import PdfPages
    import matplotlib.pyplot as plt

    out_path = Path(out_path)
    page_w_in = PAGE_WIDTH_CM * INCH_PER_CM
    page_h_in = PAGE_HEIGHT_CM * INCH_PER_CM
    margin_in = margin_cm * INCH_PER_CM
    gap_in = gap_cm * INCH_PER_CM

    avail_w = page_w_in - 2 * margin_in - gap_in * (LAYOUT_COLS - 1)
    avail_h = page_h_in - 2 * margin_in - gap_in * (LAYOUT_ROWS - 1)
    cell_in = min(avail_w / LAYOUT_COLS, avail_h / LAYOUT_ROWS)

    def draw_grid(ax, grid: Grid, left_in, bottom_in, size_in, label: str | None):
        n, b = grid.size, grid.box_size
        ax.set_position([left_in / page_w_in, bottom_in / page_h_in, size_in / page_w_in, size_in / page_h_in])
        for idx in range(n + 1):
            linewidth = 3.0 if idx % b == 0 else 1.0
            ax.axvline(idx / n, color="k", linewidth=linewidth)
            ax.axhline(idx / n, color="k", linewidth=linewidth)
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)
        ax.axis("off")
        font_size = max(1, int(FONT_SCALE * size_in * 72 / n))
        for r in range(n):
            for c in range(n):
                value = grid.get_value(r, c)
                if value:
                    x = (c + 0.5) / n
                    y = 1 - (r + 0.5) / n
                    ax.text(x, y, str(value), ha="center", va="center", fontsize=font_size)
        if label:
            ax.text(0.5, -0.04, label, ha="center", va="top", fontsize=8, transform=ax.transAxes)

    footer_y_pos_norm = (FOOTER_OFFSET_CM * INCH_PER_CM) / page_h_in
    pages = page_count(len(grids))

    with PdfPages(out_path) as pdf:
        for page_num in range(pages):
            fig = plt.figure(figsize=(page_w_in, page_h_in))
            start_idx = page_num * PUZZLES_PER_PAGE
            page_grids = grids[start_idx:start_idx + PUZZLES_PER_PAGE]

            for idx_on_page, grid in enumerate(page_grids):
                row, col = divmod(idx_on_page, LAYOUT_COLS)
                bottom = margin_in + (LAYOUT_ROWS - 1 - row) * (cell_in + gap_in)
                left = margin_in + col * (cell_in + gap_in)
                ax = fig.add_axes([0, 0, 1, 1], frameon=False)
                label = labels[start_idx + idx_on_page] if labels is not None else None
                draw_grid(ax, grid, left, bottom, cell_in, label)

            page_footer = f"{footer}    page {page_num + 1}/{pages}" if footer else f"page {page_num + 1}/{pages}"
            fig.text(0.5, footer_y_pos_norm, page_footer, ha="center", va="bottom", fontsize=8)

            pdf.savefig(fig)
            plt.close(fig)

    return out_path


__all__ = ["PUZZLES_PER_PAGE", "page_count", "render_pdf", "resolve_output_path"]
