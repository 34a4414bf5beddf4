"""Export a scene as a standalone SVG document.

Layers, bottom to top: background, masked and clipped images, cuts, frame
walls, bubbles with their text. Each image gets its own <mask> (white
container rect minus one black half-plane per masking cut) and <clipPath>.

Usage:
    python -m scene.gen_svg [scene.json] [-o out.svg] [--width W --height H] [-v]

Without a scene file the demo scene is exported.
"""
import os, sys, argparse, logging
from typing import NamedTuple

from geom.svg import fmt_num, path_d, poly_d, multi_poly_d, escape_xml
from scene.model import Scene
from scene.layers import build_layers
from scene.io import load_scene
from scene.demo import demo_scene
from scene.constants import (
    BACKGROUND_COLOR, BUBBLE_FILL, CUT_FILL, TEXT_COLOR, SHADOW_RADIUS, FONT_FAMILY,
)

log = logging.getLogger(__name__)


class ExportStyle(NamedTuple):
    background: str = BACKGROUND_COLOR
    bubble_fill: str = BUBBLE_FILL
    cut_fill: str = CUT_FILL
    text_color: str = TEXT_COLOR
    shadow_radius: float = SHADOW_RADIUS
    font_family: str = FONT_FAMILY


def _rect_attrs(r) -> str:
    return (f'x="{fmt_num(r.x)}" y="{fmt_num(r.y)}"'
            f' width="{fmt_num(r.width)}" height="{fmt_num(r.height)}"')


def render_scene_svg(scene: Scene, style: ExportStyle = ExportStyle()) -> str:
    """Render *scene* to an SVG document string. Output depends only on the inputs."""
    layers = build_layers(scene)
    w = fmt_num(scene.width); h = fmt_num(scene.height)
    out = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}"'
           f' viewBox="0 0 {w} {h}">']

    # Solid outline behind bubbles
    out.append('<defs>')
    out.append('<filter id="solid-shadow" x="-50%" y="-50%" width="200%" height="200%">')
    out.append(f'  <feMorphology in="SourceAlpha" operator="dilate"'
               f' radius="{fmt_num(style.shadow_radius)}" result="dilated"/>')
    out.append('  <feFlood flood-color="#000" result="color"/>')
    out.append('  <feComposite in="color" in2="dilated" operator="in" result="outline"/>')
    out.append('  <feMerge><feMergeNode in="outline"/><feMergeNode in="SourceGraphic"/></feMerge>')
    out.append('</filter>')
    out.append('</defs>')

    out.append(f'<rect width="100%" height="100%" fill="{escape_xml(style.background)}"/>')

    # Images
    for il in layers.images:
        iid = escape_xml(il.image.id)
        mask_id = f"mask-{iid}"; clip_id = f"clip-{iid}"
        out.append('<defs>')
        out.append(f'<mask id="{mask_id}">')
        out.append(f'  <rect {_rect_attrs(il.clip)} fill="white"/>')
        for m in il.masks:
            out.append(f'  <path d="{poly_d(m)}" fill="black"/>')
        out.append('</mask>')
        out.append(f'<clipPath id="{clip_id}"><rect {_rect_attrs(il.clip)}/></clipPath>')
        out.append('</defs>')
        if il.image.src:
            out.append(f'<image href="{escape_xml(il.image.src)}" {_rect_attrs(il.placed)}'
                       f' preserveAspectRatio="xMidYMid slice"'
                       f' clip-path="url(#{clip_id})" mask="url(#{mask_id})"/>')
        else:
            log.debug("image %s has no source, only its mask is exported", il.image.id)

    # Cuts
    for cl in layers.cuts:
        out.append(f'<path d="{poly_d(cl.poly)}" fill="{escape_xml(style.cut_fill)}"/>')

    # Frame walls
    for fl in layers.frames:
        out.append(f'<path d="{multi_poly_d(fl.polys)}" fill="{escape_xml(fl.frame.color)}"'
                   f' fill-rule="evenodd"/>')

    # Bubbles and text
    div_style = (f"width:100%; height:100%; display:flex; align-items:center;"
                 f" justify-content:center; text-align:center; color:{style.text_color};"
                 f" font-family:{style.font_family}; font-weight:500; line-height:1.375;"
                 f" padding:1rem; box-sizing:border-box; overflow:hidden; word-wrap:break-word;")
    for bl in layers.bubbles:
        b = bl.bubble
        out.append(f'<path d="{path_d(bl.path)}" fill="{escape_xml(style.bubble_fill)}"'
                   f' filter="url(#solid-shadow)"/>')
        out.append(f'<foreignObject x="{fmt_num(b.x)}" y="{fmt_num(b.y)}"'
                   f' width="{fmt_num(b.width)}" height="{fmt_num(b.height)}">')
        out.append(f'  <div xmlns="http://www.w3.org/1999/xhtml" style="{escape_xml(div_style)}">'
                   f'{escape_xml(b.text)}</div>')
        out.append('</foreignObject>')

    out.append('</svg>')
    return "\n".join(out)


def write_scene_svg(scene: Scene, path: str, style: ExportStyle = ExportStyle()) -> str:
    svg = render_scene_svg(scene, style)
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg)
    log.info("wrote %s (%d bytes)", path, len(svg))
    return path


# ============================================================
# Main entry point
# ============================================================

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="gen_svg", description="Export a bubble scene as SVG.")
    ap.add_argument("scene", nargs="?", help="scene JSON file (default: demo scene)")
    ap.add_argument("-o", "--output", default="bubblegen-export.svg", help="output SVG path")
    ap.add_argument("--width", type=float, help="override canvas width")
    ap.add_argument("--height", type=float, help="override canvas height")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.scene:
        scene = load_scene(args.scene)
    else:
        scene = demo_scene()
    if args.width is not None:
        scene = scene._replace(width=args.width)
    if args.height is not None:
        scene = scene._replace(height=args.height)

    svg_path = write_scene_svg(scene, args.output)
    print(f"Scene written to {os.path.abspath(svg_path)}")
    print(f"  {len(scene.bubbles)} bubbles, {len(scene.cuts)} cuts,"
          f" {len(scene.frames)} frames, {len(scene.images)} images")
    return 0


if __name__ == "__main__":
    sys.exit(main())
