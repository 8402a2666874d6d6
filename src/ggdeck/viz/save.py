"""
Save Altair charts to HTML or PNG.

HTML is written by Altair directly. PNG export needs the ``vl-convert-python``
package; a RuntimeError naming it is raised when it cannot be imported.
"""

from __future__ import annotations

import importlib
import os

import altair as alt


def save(
    chart: alt.TopLevelMixin,
    *,
    out_html: str | os.PathLike[str] | None = None,
    out_png: str | os.PathLike[str] | None = None,
    scale_factor: float = 2.0,
) -> list[str]:
    """
    Write a chart to HTML and/or PNG.

    Args:
        chart: Any top-level Altair chart.
        out_html: Optional HTML destination.
        out_png: Optional PNG destination.
        scale_factor: PNG pixel density multiplier.

    Returns:
        list[str]: Paths written, HTML first.

    Raises:
        RuntimeError: If PNG output is requested and vl-convert-python is missing.
    """
    written: list[str] = []
    if out_html is not None:
        path = os.fspath(out_html)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        chart.save(path)
        written.append(path)
    if out_png is not None:
        try:
            importlib.import_module("vl_convert")
        except ImportError as exc:
            raise RuntimeError(
                "PNG export requires the 'vl-convert-python' package"
            ) from exc
        path = os.fspath(out_png)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        chart.save(path, scale_factor=scale_factor)
        written.append(path)
    return written
