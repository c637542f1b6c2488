"""Replay drawing operations described in YAML or JSON.

A script is either a list of operations or a mapping with optional
``width``, ``height`` and ``title`` and an ``operations`` list::

    width: 200
    height: 100
    operations:
      - {op: set_colour, colour: "#3366cc"}
      - {op: fill_rect, rect: [10, 10, 80, 40]}
      - {op: push_group, name: labels}
      - {op: draw_text, text: Hello, rect: [10, 60, 180, 20], justification: centred}
      - {op: pop_group}

Operations run through the capability helpers, so any ``GraphicsContext``
can replay a script.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path as FilePath
from typing import Any, Callable

import yaml
from PIL import Image, UnidentifiedImageError

from svg_context import helpers
from svg_context.context.base import GraphicsContext
from svg_context.context.text_layout import Justification
from svg_context.exceptions import ScriptError
from svg_context.fills import Colour, ColourGradient, FillType
from svg_context.fonts.cache import FontCache
from svg_context.fonts.font import DEFAULT_FONT_HEIGHT, Font
from svg_context.fonts.typeface import FontToolsTypeface
from svg_context.geometry.path import Path
from svg_context.geometry.rectangles import Rectangle, RectangleList
from svg_context.geometry.transform import AffineTransform
from svg_context.imaging import ResamplingQuality

logger = logging.getLogger(__name__)


@dataclass
class Script:
    operations: list[dict[str, Any]]
    width: float = 100.0
    height: float = 100.0
    title: str | None = None


def load_script(path: FilePath | str) -> Script:
    """Load a script file (JSON is accepted as YAML)."""
    source = FilePath(path)
    try:
        data = yaml.safe_load(source.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ScriptError(f"Invalid script {source}: {e}") from e
    return parse_script(data)


def parse_script(data: Any) -> Script:
    if isinstance(data, list):
        return Script(operations=data)
    if not isinstance(data, dict):
        raise ScriptError("Script must be a list of operations or a mapping")
    operations = data.get("operations", [])
    if not isinstance(operations, list):
        raise ScriptError("'operations' must be a list")
    return Script(
        operations=operations,
        width=float(data.get("width", 100.0)),
        height=float(data.get("height", 100.0)),
        title=data.get("title"),
    )


@dataclass
class _Runner:
    ctx: GraphicsContext
    base_dir: FilePath
    fonts: FontCache = field(default_factory=FontCache)

    def resolve(self, name: str) -> FilePath:
        path = FilePath(name)
        return path if path.is_absolute() else self.base_dir / path

    def image(self, name: str) -> Image.Image:
        try:
            with Image.open(self.resolve(name)) as img:
                img.load()
                return img
        except (OSError, UnidentifiedImageError) as e:
            raise ScriptError(f"Cannot read image {name}: {e}") from e


def _rect(value) -> Rectangle:
    x, y, w, h = (float(v) for v in value)
    return Rectangle(x, y, w, h)


def _point(value) -> tuple[float, float]:
    x, y = (float(v) for v in value)
    return (x, y)


def _transform(op: dict[str, Any]) -> AffineTransform:
    """Transform from ``matrix``, ``translate``, ``scale`` and ``rotate`` keys, in that order."""
    t = AffineTransform()
    if "matrix" in op:
        t = t.followed_by(AffineTransform(*(float(v) for v in op["matrix"])))
    if "translate" in op:
        t = t.followed_by(AffineTransform.translation(*_point(op["translate"])))
    if "scale" in op:
        scale = op["scale"]
        if isinstance(scale, (int, float)):
            t = t.followed_by(AffineTransform.scale(float(scale)))
        else:
            t = t.followed_by(AffineTransform.scale(*_point(scale)))
    if "rotate" in op:
        cx, cy = _point(op.get("center", (0, 0)))
        t = t.followed_by(AffineTransform.rotation(math.radians(float(op["rotate"])), cx, cy))
    return t


def _justification(op: dict[str, Any], default: Justification) -> Justification:
    name = op.get("justification")
    if name is None:
        return default
    try:
        return Justification[str(name).upper().replace("-", "_")]
    except KeyError as e:
        raise ScriptError(f"Unknown justification {name!r}") from e


def _colour(value) -> Colour:
    try:
        return Colour.from_hex(str(value))
    except ValueError as e:
        raise ScriptError(str(e)) from e


def _svg_path(op: dict[str, Any]) -> Path:
    return Path.from_svg_data(str(op["d"]), use_non_zero_winding=not op.get("even_odd", False))


def _set_font(run: _Runner, op: dict[str, Any]) -> None:
    size = float(op.get("size", DEFAULT_FONT_HEIGHT))
    if "file" in op:
        typeface = FontToolsTypeface(run.resolve(op["file"]))
    else:
        typeface = run.fonts.get_typeface(op.get("family", "sans-serif"), op.get("style", "Regular"))
    run.ctx.set_font(Font(typeface, size, float(op.get("horizontal_scale", 1.0))))


def _set_gradient(run: _Runner, op: dict[str, Any]) -> None:
    stops = [(float(pos), _colour(colour)) for pos, colour in op["stops"]]
    x1, y1 = _point(op["from"])
    x2, y2 = _point(op["to"])
    kind = op.get("type", "linear")
    if kind == "linear":
        gradient = ColourGradient.linear(x1, y1, x2, y2, stops)
    elif kind == "radial":
        gradient = ColourGradient.radial(x1, y1, x2, y2, stops)
    else:
        raise ScriptError(f"Unknown gradient type {kind!r}")
    run.ctx.set_fill(FillType.from_gradient(gradient))


def _set_colour(run: _Runner, op: dict[str, Any]) -> None:
    fill = FillType.solid(_colour(op["colour"]))
    if "opacity" in op:
        fill = fill.with_opacity(float(op["opacity"]))
    run.ctx.set_fill(fill)


def _set_quality(run: _Runner, op: dict[str, Any]) -> None:
    try:
        run.ctx.set_interpolation_quality(ResamplingQuality(str(op["quality"]).lower()))
    except ValueError as e:
        raise ScriptError(f"Unknown quality {op['quality']!r}") from e


OPERATIONS: dict[str, Callable[[_Runner, dict[str, Any]], Any]] = {
    "save": lambda run, op: run.ctx.save_state(),
    "restore": lambda run, op: run.ctx.restore_state(),
    "set_origin": lambda run, op: run.ctx.set_origin(float(op["x"]), float(op["y"])),
    "add_transform": lambda run, op: run.ctx.add_transform(_transform(op)),
    "clip_rect": lambda run, op: run.ctx.clip_to_rectangle(_rect(op["rect"])),
    "clip_rects": lambda run, op: run.ctx.clip_to_rectangle_list(RectangleList(_rect(r) for r in op["rects"])),
    "exclude_rect": lambda run, op: run.ctx.exclude_clip_rectangle(_rect(op["rect"])),
    "clip_path": lambda run, op: run.ctx.clip_to_path(_svg_path(op), _transform(op)),
    "clip_image": lambda run, op: run.ctx.clip_to_image_alpha(run.image(op["image"]), _transform(op)),
    "set_colour": _set_colour,
    "set_gradient": _set_gradient,
    "set_opacity": lambda run, op: run.ctx.set_opacity(float(op["opacity"])),
    "begin_layer": lambda run, op: run.ctx.begin_transparency_layer(float(op["opacity"])),
    "end_layer": lambda run, op: run.ctx.end_transparency_layer(),
    "set_quality": _set_quality,
    "fill_rect": lambda run, op: run.ctx.fill_rect(_rect(op["rect"])),
    "fill_rects": lambda run, op: run.ctx.fill_rect_list(RectangleList(_rect(r) for r in op["rects"])),
    "fill_path": lambda run, op: run.ctx.fill_path(_svg_path(op), _transform(op)),
    "draw_image": lambda run, op: run.ctx.draw_image(run.image(op["image"]), _transform(op)),
    "draw_line": lambda run, op: run.ctx.draw_line(*_point(op["from"]), *_point(op["to"])),
    "set_font": _set_font,
    "draw_glyph": lambda run, op: run.ctx.draw_glyph(int(op["glyph"]), _transform(op)),
    "text": lambda run, op: helpers.draw_single_line_text(
        run.ctx, str(op["text"]), float(op["x"]), float(op["y"]), _justification(op, Justification.LEFT)
    ),
    "multiline_text": lambda run, op: helpers.draw_multi_line_text(
        run.ctx, str(op["text"]), float(op["x"]), float(op["y"]), float(op["max_width"])
    ),
    "draw_text": lambda run, op: helpers.draw_text(
        run.ctx,
        str(op["text"]),
        _rect(op["rect"]),
        _justification(op, Justification.CENTRED_LEFT),
        bool(op.get("ellipsis", True)),
    ),
    "fitted_text": lambda run, op: helpers.draw_fitted_text(
        run.ctx,
        str(op["text"]),
        _rect(op["rect"]),
        _justification(op, Justification.CENTRED_LEFT),
        int(op.get("max_lines", 1)),
        float(op.get("min_scale", 0.0)),
    ),
    "push_group": lambda run, op: helpers.push_group(run.ctx, str(op["name"])),
    "pop_group": lambda run, op: helpers.pop_group(run.ctx),
    "set_tags": lambda run, op: helpers.set_tags(run.ctx, dict(op["tags"])),
    "clear_tags": lambda run, op: helpers.clear_tags(run.ctx),
}


def run_script(
    ctx: GraphicsContext,
    operations: list[dict[str, Any]],
    base_dir: FilePath | str | None = None,
    fonts: FontCache | None = None,
) -> int:
    """Apply ``operations`` to ``ctx`` in order; returns the number applied."""
    runner = _Runner(ctx, FilePath(base_dir or "."), fonts or FontCache())
    for index, op in enumerate(operations):
        if not isinstance(op, dict) or "op" not in op:
            raise ScriptError("expected a mapping with an 'op' key", index)
        handler = OPERATIONS.get(op["op"])
        if handler is None:
            raise ScriptError(f"unknown operation {op['op']!r}", index)
        try:
            handler(runner, op)
        except ScriptError as e:
            if e.index is not None:
                raise
            raise ScriptError(str(e), index) from e
        except KeyError as e:
            raise ScriptError(f"{op['op']} is missing field {e.args[0]!r}", index) from e
        except (TypeError, ValueError) as e:
            raise ScriptError(f"{op['op']}: {e}", index) from e
        logger.debug("Applied #%d %s", index, op["op"])
    return len(operations)
