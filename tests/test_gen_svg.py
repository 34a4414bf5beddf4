"""Tests for scene/gen_svg.py SVG export."""
import re
import xml.etree.ElementTree as ET
import pytest
from geom.svg import parse_path_d, path_points, poly_d
from geom.bubble import bubble_path
from geom.geometry import tapered_segment
from scene.model import Scene, Bubble, add_bubble, update_image
from scene.io import SceneFormatError, save_scene
from scene.gen_svg import ExportStyle, render_scene_svg, write_scene_svg, main

_SVG_NS = "{http://www.w3.org/2000/svg}"


def _mask_block(svg: str, image_id: str) -> str:
    start = svg.index(f'<mask id="mask-{image_id}">')
    return svg[start:svg.index('</mask>', start)]


class TestRenderSceneSvg:
    def test_well_formed_xml(self, demo_svg):
        root = ET.fromstring(demo_svg)
        assert root.tag == f"{_SVG_NS}svg"
        assert root.get("viewBox") == "0 0 1280 800"

    def test_deterministic(self, demo, demo_svg):
        assert render_scene_svg(demo) == demo_svg

    def test_background_and_filter(self, demo_svg):
        assert '<rect width="100%" height="100%" fill="#0f172a"/>' in demo_svg
        assert '<filter id="solid-shadow"' in demo_svg

    def test_layer_order(self, demo_svg):
        i_mask = demo_svg.index('<mask id="mask-img1">')
        i_cut = demo_svg.index('fill="black"/>', demo_svg.index('</defs>', i_mask))
        i_frame = demo_svg.index('fill-rule="evenodd"')
        i_bubble = demo_svg.index('filter="url(#solid-shadow)"')
        assert i_mask < i_cut < i_frame < i_bubble

    def test_locked_image_mask_has_one_half_plane(self, demo_svg):
        block = _mask_block(demo_svg, "img1")
        assert block.count('<path ') == 1
        assert '<rect x="512" y="272" width="256" height="256" fill="white"/>' in block

    def test_clip_path(self, demo_svg):
        assert ('<clipPath id="clip-img1"><rect x="512" y="272" width="256" height="256"/>'
                '</clipPath>') in demo_svg

    def test_image_without_src_not_drawn(self, demo_svg):
        assert '<image ' not in demo_svg

    def test_image_with_src(self, demo):
        s = update_image(demo, "img1", src="data:image/png;base64,AAAA", scale=0.5)
        svg = render_scene_svg(s)
        assert ('<image href="data:image/png;base64,AAAA" x="576" y="336" width="128"'
                ' height="128" preserveAspectRatio="xMidYMid slice"'
                ' clip-path="url(#clip-img1)" mask="url(#mask-img1)"/>') in svg

    def test_cut_paths(self, demo, demo_svg):
        for c in demo.cuts:
            d = poly_d(tapered_segment(c.p1, c.p2, c.t1, c.t2))
            assert f'<path d="{d}" fill="black"/>' in demo_svg

    def test_frame_even_odd_wall(self, demo_svg):
        m = re.search(r'<path d="([^"]*)" fill="#000000" fill-rule="evenodd"/>', demo_svg)
        subs = parse_path_d(m.group(1))
        assert len(subs) == 2
        assert subs[0][0] == (-10000, -10000)
        assert subs[1] == [(100, 100), (1180, 100), (1180, 700), (100, 700)]

    def test_text_escaped(self):
        s = add_bubble(Scene(400, 300), Bubble("b", 10, 10, 200, 80, (50, 200),
                                               "<script>&\"'"))
        svg = render_scene_svg(s)
        assert "&lt;script&gt;&amp;&quot;&apos;" in svg
        assert "<script>" not in svg
        ET.fromstring(svg)

    def test_demo_text_escaped(self, demo_svg):
        assert "Python + SVG = &lt;3" in demo_svg

    def test_custom_style(self, demo):
        svg = render_scene_svg(demo, ExportStyle(background="#fff", bubble_fill="#ffe"))
        assert 'fill="#fff"/>' in svg
        assert 'fill="#ffe" filter="url(#solid-shadow)"' in svg

    def test_empty_scene(self):
        root = ET.fromstring(render_scene_svg(Scene(10, 20)))
        assert root.get("width") == "10" and root.get("height") == "20"


class TestRoundTrip:
    def test_bubble_paths_reparse(self, demo, demo_svg):
        ds = re.findall(r'<path d="([^"]*)" fill="white" filter=', demo_svg)
        assert len(ds) == len(demo.bubbles)
        for d, b in zip(ds, demo.bubbles):
            (parsed,) = parse_path_d(d)
            expected = path_points(bubble_path(b.x, b.y, b.width, b.height, b.anchor, b.radius))
            assert len(parsed) == len(expected)
            for p, e in zip(parsed, expected):
                assert abs(p[0] - e[0]) < 1e-3
                assert abs(p[1] - e[1]) < 1e-3

    def test_mask_paths_reparse(self, demo, demo_layers, demo_svg):
        block = _mask_block(demo_svg, "img1")
        (d,) = re.findall(r'<path d="([^"]*)"', block)
        (parsed,) = parse_path_d(d)
        expected = demo_layers.images[0].masks[0]
        assert len(parsed) == len(expected)
        for p, e in zip(parsed, expected):
            assert abs(p[0] - e[0]) < 1e-3
            assert abs(p[1] - e[1]) < 1e-3


class TestWriteAndMain:
    def test_write_scene_svg(self, tmp_path, demo, demo_svg):
        out = tmp_path / "scene.svg"
        write_scene_svg(demo, str(out))
        assert out.read_text(encoding="utf-8") == demo_svg

    def test_main_demo(self, tmp_path, capsys):
        out = tmp_path / "demo.svg"
        assert main(["-o", str(out)]) == 0
        assert out.exists()
        assert "3 bubbles, 2 cuts, 1 frames, 1 images" in capsys.readouterr().out

    def test_main_scene_file_with_size_override(self, tmp_path, demo):
        src = save_scene(demo, tmp_path / "scene.json")
        out = tmp_path / "out.svg"
        assert main([str(src), "-o", str(out), "--width", "640", "--height", "480"]) == 0
        root = ET.fromstring(out.read_text(encoding="utf-8"))
        assert root.get("viewBox") == "0 0 640 480"

    def test_main_bad_scene_file(self, tmp_path):
        src = tmp_path / "bad.json"
        src.write_text("[]", encoding="utf-8")
        with pytest.raises(SceneFormatError, match="JSON object"):
            main([str(src), "-o", str(tmp_path / "x.svg")])
