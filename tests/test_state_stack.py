"""Unit tests for save/restore state handling.

Tests cover StateStack balance, frame copy semantics and the strict/lenient
handling of unbalanced restore_state() calls.
"""

import logging
import xml.etree.ElementTree as ET

import pytest

from svg_context import AffineTransform, Colour, FillType, Rectangle, StateUnderflowError
from svg_context.context.state import GraphicsState, StateStack


class TestStateStack:
    """Tests for the StateStack container."""

    def test_starts_with_root_frame(self):
        """Verify a new stack holds only the root frame."""
        stack = StateStack(GraphicsState())
        assert len(stack) == 1

    def test_push_clones_current(self):
        """Verify push copies the current frame."""
        root = GraphicsState(origin_offset=(3.0, 4.0), tags={"data-a": "1"})
        stack = StateStack(root)
        top = stack.push()
        assert top is not root
        assert top.origin_offset == (3.0, 4.0)
        top.tags["data-b"] = "2"
        assert "data-b" not in root.tags

    def test_pop_root_raises(self):
        """Verify popping the root frame raises."""
        stack = StateStack(GraphicsState())
        with pytest.raises(StateUnderflowError):
            stack.pop()

    def test_pop_returns_previous_frame(self):
        """Verify pop returns the frame below."""
        root = GraphicsState()
        stack = StateStack(root)
        stack.push()
        assert stack.pop() is root

    def test_copy_shares_tree_nodes(self):
        """Verify the active group is aliased while clip geometry and open groups are not."""
        group = ET.Element("g")
        frame = GraphicsState(active_group=group, open_groups=[(group, None)])
        clone = frame.copy()
        assert clone.active_group is group
        assert clone.open_groups == []
        assert frame.open_groups == [(group, None)]
        assert clone.clip_regions is not frame.clip_regions


class TestSaveRestore:
    """Tests for save_state()/restore_state() on the SVG context."""

    def test_balanced_calls(self, ctx):
        """Verify balanced save/restore calls return to depth one."""
        ctx.save_state()
        ctx.save_state()
        assert ctx.depth == 3
        ctx.restore_state()
        ctx.restore_state()
        assert ctx.depth == 1

    def test_nested_round_trip_restores_every_field(self, ctx, mono_font):
        """Verify N saves and N restores bring back clip, transform, fill, font and tags."""
        before = ctx.state.copy()
        ctx.save_state()
        ctx.add_transform(AffineTransform.scale(2))
        ctx.set_font(mono_font)
        ctx.save_state()
        ctx.set_tags({"data-layer": "top"})
        ctx.clip_to_rectangle(Rectangle(5, 5, 20, 20))
        ctx.set_fill(FillType.solid(Colour(0, 128, 0)))
        ctx.restore_state()
        ctx.restore_state()
        after = ctx.state
        assert ctx.depth == 1
        assert after.transform == before.transform
        assert after.font == before.font
        assert after.tags == before.tags
        assert after.clip_path == before.clip_path
        assert after.clip_regions == before.clip_regions
        assert after.fill == before.fill
        assert after.gradient_ref == before.gradient_ref
        assert after.origin_offset == before.origin_offset
        assert after.active_group is before.active_group

    def test_restore_reverts_fill(self, ctx):
        """Verify restore brings back the saved fill."""
        red = FillType.solid(Colour(255, 0, 0))
        ctx.set_fill(red)
        ctx.save_state()
        ctx.set_fill(FillType.solid(Colour(0, 0, 255)))
        ctx.restore_state()
        assert ctx.state.fill == red

    def test_restore_reverts_clip(self, ctx):
        """Verify restore brings back the saved clip."""
        ctx.save_state()
        ctx.clip_to_rectangle(Rectangle(0, 0, 10, 10))
        assert ctx.get_clip_bounds() == Rectangle(0, 0, 10, 10)
        ctx.restore_state()
        assert ctx.get_clip_bounds() == Rectangle(0, 0, 200, 100)

    def test_restore_reverts_origin(self, ctx):
        """Verify restore brings back the saved origin."""
        ctx.save_state()
        ctx.set_origin(10, 10)
        ctx.restore_state()
        assert ctx.state.origin_offset == (0.0, 0.0)

    def test_save_restore_has_no_tree_side_effects(self, ctx):
        """Verify save and restore add nothing to the tree."""
        before = len(ctx.document.root)
        ctx.save_state()
        ctx.restore_state()
        assert len(ctx.document.root) == before

    def test_strict_underflow_raises(self, ctx):
        """Verify an unmatched restore raises in strict mode."""
        with pytest.raises(StateUnderflowError):
            ctx.restore_state()

    def test_lenient_underflow_logs_warning(self, lenient_ctx, caplog):
        """Verify an unmatched restore only warns in lenient mode."""
        with caplog.at_level(logging.WARNING, logger="svg_context"):
            lenient_ctx.restore_state()
        assert lenient_ctx.depth == 1
        assert "restore_state()" in caplog.text
