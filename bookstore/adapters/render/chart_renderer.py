import base64
import hashlib
import json
from io import BytesIO
from threading import Lock
from typing import Any

import matplotlib.figure
from matplotlib.backends.backend_agg import FigureCanvasAgg

MAX_CACHED_CHARTS = 32


class ChartRenderer:
    """
    Renders dashboard charts to PNG with matplotlib's Agg canvas.

    Spec:
    {
        "type": "bar" | "line" | "pie",
        "title": str,
        "data": {"x": [labels], "y": [values]},
        "colors": [str],      # optional, one per value
        "xlabel": str,
        "ylabel": str
    }

    Identical specs are served from an in-memory cache keyed on the spec
    and the output size.
    """

    def __init__(self, max_cached: int = MAX_CACHED_CHARTS):
        self.max_cached = max_cached
        self._cache: dict[str, bytes] = {}
        self._lock = Lock()

    @staticmethod
    def cache_key(spec: dict[str, Any], width: int, height: int, dpi: int) -> str:
        spec_str = json.dumps(spec, sort_keys=True, default=str)
        return hashlib.md5(f"{spec_str}|{width}|{height}|{dpi}".encode()).hexdigest()

    def render_chart(
        self, spec: dict[str, Any], width: int = 640, height: int = 360, dpi: int = 100
    ) -> bytes:
        key = self.cache_key(spec, width, height, dpi)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        fig = matplotlib.figure.Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(111)

        data = spec.get("data", {})
        x = [str(v) for v in data.get("x", [])]
        y = list(data.get("y", []))
        colors = spec.get("colors") or None

        c_type = spec.get("type", "bar")
        if c_type == "pie":
            # Zero slices make matplotlib draw overlapping labels
            pairs = [(lbl, val, i) for i, (lbl, val) in enumerate(zip(x, y)) if val]
            if pairs:
                ax.pie(
                    [p[1] for p in pairs],
                    labels=[p[0] for p in pairs],
                    colors=[colors[p[2]] for p in pairs] if colors else None,
                    autopct="%1.0f%%",
                    startangle=90,
                )
                ax.axis("equal")
            else:
                ax.text(0.5, 0.5, "No data", ha="center", va="center")
                ax.set_axis_off()
        elif c_type == "line":
            ax.plot(x, y, marker="o")
        else:
            ax.bar(x, y, color=colors)

        if title := spec.get("title"):
            ax.set_title(title)
        if xlabel := spec.get("xlabel"):
            ax.set_xlabel(xlabel)
        if ylabel := spec.get("ylabel"):
            ax.set_ylabel(ylabel)

        fig.tight_layout()

        buf = BytesIO()
        fig.savefig(buf, format="png")
        png_data = buf.getvalue()
        buf.close()

        with self._lock:
            if len(self._cache) >= self.max_cached:
                self._cache.pop(next(iter(self._cache)))
            self._cache[key] = png_data

        return png_data

    def render_base64(self, spec: dict[str, Any], **kwargs: Any) -> str:
        """PNG as base64 text, the form ft.Image(src_base64=...) takes."""
        return base64.b64encode(self.render_chart(spec, **kwargs)).decode("ascii")
