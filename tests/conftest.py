"""Shared test fixtures for bubblegen tests."""
import pytest
from scene.demo import demo_scene
from scene.layers import build_layers
from scene.gen_svg import render_scene_svg


@pytest.fixture(scope="session")
def demo():
    """Demo scene on the default 1280x800 canvas."""
    return demo_scene()


@pytest.fixture(scope="session")
def demo_layers(demo):
    return build_layers(demo)


@pytest.fixture(scope="session")
def demo_svg(demo):
    return render_scene_svg(demo)


@pytest.fixture
def box():
    """(x, y, w, h) of a default-size bubble at the origin."""
    return (0.0, 0.0, 220.0, 100.0)
