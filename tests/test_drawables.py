"""Unit tests for rectangles, paths, images, lines and glyphs."""

import pytest

from svg_context import (
    AffineTransform,
    Colour,
    Config,
    FillType,
    Font,
    FontToolsTypeface,
    Path,
    Rectangle,
    RectangleList,
    ResamplingQuality,
    SVGGraphicsContext,
)


def _only(ctx, tag):
    (element,) = list(ctx.document.root.iter(tag))
    return element


def _triangle():
    path = Path()
    path.start_new_sub_path(0, 0)
    path.line_to(10, 0)
    path.line_to(0, 10)
    path.close_sub_path()
    return path


class TestFillRect:
    """Tests for fill_rect()."""

    def test_rect_attributes(self, ctx):
        """Verify fill_rect writes position, size and fill."""
        ctx.set_fill(FillType.solid(Colour(255, 0, 0)))
        ctx.fill_rect(Rectangle(10, 20, 30, 40))
        rect = _only(ctx, "rect")
        assert [rect.get(k) for k in ("x", "y", "width", "height")] == ["10", "20", "30", "40"]
        assert rect.get("fill") == "rgb(255,0,0)"
        assert rect.get("fill-opacity") == "1"
        assert rect.get("transform") is None

    def test_default_fill_is_black(self, ctx):
        """Verify the default fill colour is black."""
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        assert _only(ctx, "rect").get("fill") == "rgb(0,0,0)"

    def test_rect_attached_to_root_without_clip(self, ctx):
        """Verify rects attach to the root when no clip is set."""
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        assert ctx.document.root[-1].tag == "rect"

    def test_offset_composition(self, ctx):
        """Each set_origin() adds to the previous offset."""
        ctx.set_origin(5, 5)
        ctx.fill_rect(Rectangle(0, 0, 10, 10))
        ctx.set_origin(5, 5)
        ctx.fill_rect(Rectangle(0, 0, 10, 10))
        first, second = ctx.document.root.iter("rect")
        assert (first.get("x"), first.get("y")) == ("5", "5")
        assert (second.get("x"), second.get("y")) == ("10", "10")

    def test_transform_attribute(self, ctx):
        """Verify a transform is written as a matrix attribute."""
        ctx.add_transform(AffineTransform.scale(2))
        ctx.fill_rect(Rectangle(0, 0, 10, 10))
        assert _only(ctx, "rect").get("transform") == "matrix(2,0,0,2,0,0)"

    def test_composed_transform(self, ctx):
        """Verify successive transforms compose in call order."""
        ctx.add_transform(AffineTransform.scale(2))
        ctx.add_transform(AffineTransform.translation(3, 4))
        ctx.fill_rect(Rectangle(0, 0, 10, 10))
        assert _only(ctx, "rect").get("transform") == "matrix(2,0,0,2,3,4)"

    def test_empty_rect_skipped(self, ctx):
        """Verify empty rectangles produce no element."""
        ctx.fill_rect(Rectangle(0, 0, 0, 10))
        assert list(ctx.document.root.iter("rect")) == []

    def test_opacity_multiplies_colour_alpha(self, ctx):
        """Verify set_opacity scales the fill opacity."""
        ctx.set_fill(FillType.solid(Colour(0, 0, 255, 0.5)))
        ctx.set_opacity(0.5)
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        assert _only(ctx, "rect").get("fill-opacity") == "0.25"

    def test_transparency_layer(self, ctx):
        """Verify a transparency layer sets the opacity until it ends."""
        ctx.begin_transparency_layer(0.4)
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        ctx.end_transparency_layer()
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        first, second = ctx.document.root.iter("rect")
        assert first.get("fill-opacity") == "0.4"
        assert second.get("fill-opacity") == "1"

    def test_precision_from_config(self):
        """Verify the configured precision drives number formatting."""
        ctx = SVGGraphicsContext(10, 10, config=Config(precision=1))
        ctx.fill_rect(Rectangle(1.26, 0, 1, 1))
        assert _only(ctx, "rect").get("x") == "1.3"


class TestTags:
    """Tests for set_tags()/clear_tags()."""

    def test_tags_applied(self, ctx):
        """Verify tags are merged onto drawables."""
        ctx.set_tags({"data-id": "a", "class": "box"})
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        rect = _only(ctx, "rect")
        assert rect.get("data-id") == "a"
        assert rect.get("class") == "box"

    def test_set_tags_replaces_previous(self, ctx):
        """Verify set_tags replaces earlier tags."""
        ctx.set_tags({"data-id": "a"})
        ctx.set_tags({"data-role": "b"})
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        rect = _only(ctx, "rect")
        assert rect.get("data-id") is None
        assert rect.get("data-role") == "b"

    def test_tags_win_over_paint(self, ctx):
        """Verify tags override paint attributes of the same name."""
        ctx.set_tags({"fill": "none"})
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        assert _only(ctx, "rect").get("fill") == "none"

    def test_clear_tags(self, ctx):
        """Verify clear_tags stops tagging new drawables."""
        ctx.set_tags({"data-id": "a"})
        ctx.clear_tags()
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        assert _only(ctx, "rect").get("data-id") is None

    def test_tags_restored_with_state(self, ctx):
        """Verify tags are restored by restore_state."""
        ctx.set_tags({"data-id": "outer"})
        ctx.save_state()
        ctx.set_tags({"data-id": "inner"})
        ctx.restore_state()
        ctx.fill_rect(Rectangle(0, 0, 1, 1))
        assert _only(ctx, "rect").get("data-id") == "outer"


class TestFillPath:
    """Tests for fill_path() and fill_rect_list()."""

    def test_path_data(self, ctx):
        """Verify fill_path writes the path data."""
        ctx.fill_path(_triangle(), AffineTransform())
        assert _only(ctx, "path").get("d") == "M 0 0 L 10 0 L 0 10 Z"

    def test_call_transform_and_offset_pre_applied(self, ctx):
        """Verify the call transform and origin are baked into the path data."""
        ctx.set_origin(100, 0)
        ctx.fill_path(_triangle(), AffineTransform.scale(2))
        path = _only(ctx, "path")
        assert path.get("d") == "M 100 0 L 120 0 L 100 20 Z"
        assert path.get("transform") is None

    def test_even_odd(self, ctx):
        """Verify even-odd paths set fill-rule."""
        path = Path.from_svg_data("M 0 0 L 10 0 L 10 10 Z", use_non_zero_winding=False)
        ctx.fill_path(path, AffineTransform())
        assert _only(ctx, "path").get("fill-rule") == "evenodd"

    def test_empty_path_skipped(self, ctx):
        """Verify empty paths produce no element."""
        ctx.fill_path(Path(), AffineTransform())
        assert list(ctx.document.root.iter("path")) == []

    def test_rect_list_is_one_path(self, ctx):
        """Verify fill_rect_list writes a single path."""
        ctx.fill_rect_list(RectangleList([Rectangle(0, 0, 5, 5), Rectangle(10, 0, 5, 5)]))
        path = _only(ctx, "path")
        assert path.get("d").count("Z") == 2


class TestDrawImage:
    """Tests for draw_image()."""

    def test_untransformed_image(self, ctx, rgba_image):
        """Verify an untransformed image is placed by x and y."""
        ctx.set_origin(10, 20)
        ctx.draw_image(rgba_image, AffineTransform())
        image = _only(ctx, "image")
        assert (image.get("x"), image.get("y")) == ("10", "20")
        assert (image.get("width"), image.get("height")) == ("4", "2")
        assert image.get("transform") is None
        assert image.get("xlink:href").startswith("data:image/png;base64,")

    def test_transformed_image(self, ctx, rgba_image):
        """Verify a transformed image carries a matrix."""
        ctx.set_origin(10, 20)
        ctx.draw_image(rgba_image, AffineTransform.scale(2))
        image = _only(ctx, "image")
        assert (image.get("x"), image.get("y")) == ("0", "0")
        assert image.get("transform") == "matrix(2,0,0,2,10,20)"

    @pytest.mark.parametrize(
        ("quality", "expected"),
        [
            (ResamplingQuality.LOW, "optimizeSpeed"),
            (ResamplingQuality.MEDIUM, "auto"),
            (ResamplingQuality.HIGH, "optimizeQuality"),
        ],
    )
    def test_image_rendering(self, ctx, rgba_image, quality, expected):
        """Verify interpolation quality maps to image-rendering."""
        ctx.set_interpolation_quality(quality)
        ctx.draw_image(rgba_image, AffineTransform())
        assert _only(ctx, "image").get("image-rendering") == expected


class TestDrawLine:
    """Tests for draw_line()."""

    def test_line_uses_stroke(self, ctx):
        """Verify draw_line strokes with the fill colour."""
        ctx.set_fill(FillType.solid(Colour(0, 128, 0, 0.5)))
        ctx.set_origin(1, 2)
        ctx.draw_line(0, 0, 10, 10)
        line = _only(ctx, "line")
        assert [line.get(k) for k in ("x1", "y1", "x2", "y2")] == ["1", "2", "11", "12"]
        assert line.get("stroke") == "rgb(0,128,0)"
        assert line.get("stroke-opacity") == "0.5"
        assert line.get("fill") is None


class TestDrawGlyph:
    """Tests for draw_glyph()."""

    def test_glyph_without_outline_draws_nothing(self, ctx):
        """Verify glyphs without an outline produce no element."""
        ctx.draw_glyph(65, AffineTransform())
        assert list(ctx.document.root.iter("path")) == []

    def test_glyph_outline_scaled_and_placed(self, ctx, test_font_file):
        """Verify glyph outlines are scaled by the font height and placed."""
        typeface = FontToolsTypeface(test_font_file)
        ctx.set_font(Font(typeface, 10.0))
        glyph = typeface.get_glyph_ids("A")[0]
        ctx.draw_glyph(glyph, AffineTransform.translation(20, 30))
        d = _only(ctx, "path").get("d")
        assert d.startswith("M ")
        assert "25 25" in d
        assert d.endswith("Z")

    def test_horizontal_scale(self, ctx, test_font_file):
        """Verify the font horizontal scale stretches glyph outlines."""
        typeface = FontToolsTypeface(test_font_file)
        ctx.set_font(Font(typeface, 10.0, horizontal_scale=2.0))
        ctx.draw_glyph(typeface.get_glyph_ids("A")[0], AffineTransform())
        d = _only(ctx, "path").get("d")
        assert "10 -5" in d

    def test_physical_pixel_scale_and_vector_device(self, ctx):
        """Verify the context reports unit pixel scale and a vector device."""
        assert ctx.is_vector_device()
        assert ctx.get_physical_pixel_scale_factor() == 1.0
        assert ctx.vector_extensions() is ctx
