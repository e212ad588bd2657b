import base64

import pytest

from bookstore.adapters.render.chart_renderer import ChartRenderer


@pytest.fixture
def renderer():
    return ChartRenderer()


@pytest.mark.parametrize("chart_type", ["bar", "line", "pie"])
def test_render_chart_produces_png(renderer, chart_type):
    spec = {"type": chart_type, "title": "Test Chart", "data": {"x": ["A", "B"], "y": [1, 2]}}

    data = renderer.render_chart(spec, width=320, height=240)

    # PNG signature: 89 50 4E 47 0D 0A 1A 0A
    assert data.startswith(b"\x89PNG")


def test_pie_without_data_still_renders(renderer):
    data = renderer.render_chart({"type": "pie", "data": {"x": ["A", "B"], "y": [0, 0]}})
    assert data.startswith(b"\x89PNG")


def test_identical_spec_is_served_from_cache(renderer):
    spec = {"type": "bar", "data": {"x": ["A"], "y": [1]}}
    first = renderer.render_chart(spec)
    assert renderer.render_chart(spec) is first


def test_cache_key_depends_on_size(renderer):
    spec = {"type": "bar", "data": {"x": ["A"], "y": [1]}}
    assert renderer.cache_key(spec, 640, 360, 100) != renderer.cache_key(spec, 800, 600, 100)
    assert renderer.cache_key(spec, 640, 360, 100) == renderer.cache_key(dict(spec), 640, 360, 100)


def test_cache_evicts_oldest():
    renderer = ChartRenderer(max_cached=2)
    specs = [{"type": "bar", "data": {"x": ["A"], "y": [i]}} for i in range(3)]
    first = renderer.render_chart(specs[0])
    renderer.render_chart(specs[1])
    renderer.render_chart(specs[2])

    assert renderer.render_chart(specs[0]) is not first


def test_render_base64(renderer):
    text = renderer.render_base64({"type": "line", "data": {"x": [1, 2], "y": [3, 4]}})
    assert base64.b64decode(text).startswith(b"\x89PNG")
