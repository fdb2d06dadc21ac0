# Scene → SVG/PNG output
import base64
import io
import logging
from html import escape
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from floorplan.scene import FILL_POLYGON, LABEL, LINE, Scene

logger = logging.getLogger(__name__)

BACKGROUND = "#ffffff"


def _fmt(v: float) -> str:
    # trim float noise so identical scenes give identical markup
    return f"{v:.3f}".rstrip("0").rstrip(".")


def _points_attr(geometry) -> str:
    return " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in geometry)


def _svg_fill(style: Dict[str, Any]) -> str:
    attrs = [f'fill="{style.get("fill", "none")}"']
    if "fill_opacity" in style:
        attrs.append(f'fill-opacity="{_fmt(style["fill_opacity"])}"')
    stroke = style.get("stroke", "none")
    attrs.append(f'stroke="{stroke}"')
    if stroke != "none":
        attrs.append(f'stroke-width="{_fmt(style.get("stroke_width", 1))}"')
        if style.get("stroke_dasharray"):
            attrs.append(f'stroke-dasharray="{style["stroke_dasharray"]}"')
    return " ".join(attrs)


def render_svg(scene: Scene, background: str = BACKGROUND) -> str:
    W, H = _fmt(scene.width), _fmt(scene.height)

    svg = []
    svg.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{W}" height="{H}" viewBox="0 0 {W} {H}">')
    svg.append('''<style>
        .label { font-family: Inter, system-ui, sans-serif; text-anchor: middle; dominant-baseline: middle; pointer-events: none; }
    </style>''')
    svg.append(f'<rect x="0" y="0" width="{W}" height="{H}" fill="{background}" />')

    for p in scene:
        s = p.style
        if p.kind == FILL_POLYGON:
            svg.append(f'<polygon points="{_points_attr(p.geometry)}" {_svg_fill(s)}/>')
        elif p.kind == LINE:
            (x1, y1), (x2, y2) = p.geometry
            svg.append(
                f'<line x1="{_fmt(x1)}" y1="{_fmt(y1)}" x2="{_fmt(x2)}" y2="{_fmt(y2)}" '
                f'stroke="{s.get("stroke", "#333333")}" stroke-width="{_fmt(s.get("stroke_width", 1))}" '
                f'stroke-linecap="{s.get("stroke_linecap", "butt")}"/>'
            )
        elif p.kind == LABEL:
            x, y = p.geometry[0]
            svg.append(
                f'<text x="{_fmt(x)}" y="{_fmt(y)}" class="label" fill="{s.get("fill", "#000000")}" '
                f'style="font-size:{_fmt(s.get("font_size", 10))}px;">{escape(p.text or "")}</text>'
            )
        else:
            logger.warning("Unknown primitive kind %r; not drawn", p.kind)

    svg.append("</svg>")
    return "".join(svg)


def _line_width_points(display_units: float, dpi: int) -> float:
    # one display unit is one pixel of the output image
    return display_units * 72.0 / dpi


def render_png_base64(scene: Scene, dpi: int = 100, background: str = BACKGROUND) -> str:
    fig = plt.figure(figsize=(max(scene.width, 1) / dpi, max(scene.height, 1) / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    fig.patch.set_facecolor(background)

    try:
        for z, p in enumerate(scene):
            s = p.style
            if p.kind == FILL_POLYGON:
                fill = s.get("fill", "none")
                stroke = s.get("stroke", "none")
                patch = mpatches.Polygon(
                    p.geometry, closed=True,
                    facecolor="none" if fill == "none" else fill,
                    alpha=None if fill == "none" else s.get("fill_opacity", 1.0),
                    edgecolor="none" if stroke == "none" else stroke,
                    linewidth=_line_width_points(s.get("stroke_width", 0), dpi) if stroke != "none" else 0,
                    linestyle=(0, tuple(float(v) for v in s["stroke_dasharray"].split(",")))
                    if s.get("stroke_dasharray") else "solid",
                    zorder=z,
                )
                ax.add_patch(patch)
            elif p.kind == LINE:
                xs: List[float] = [pt[0] for pt in p.geometry]
                ys: List[float] = [pt[1] for pt in p.geometry]
                ax.plot(xs, ys, color=s.get("stroke", "#333333"),
                        linewidth=_line_width_points(s.get("stroke_width", 1), dpi),
                        solid_capstyle=s.get("stroke_linecap", "butt"), zorder=z)
            elif p.kind == LABEL:
                x, y = p.geometry[0]
                ax.text(x, y, p.text or "", ha="center", va="center",
                        fontsize=_line_width_points(s.get("font_size", 10), dpi),
                        color=s.get("fill", "#000000"), zorder=z)

        ax.set_xlim(0, scene.width)
        ax.set_ylim(scene.height, 0)  # display y grows downward
        ax.set_aspect("equal")
        ax.axis("off")

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi, facecolor=fig.get_facecolor())
        buf.seek(0)
        return base64.b64encode(buf.getvalue()).decode("utf-8")
    finally:
        plt.close(fig)
