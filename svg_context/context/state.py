"""Graphics state frames and the save/restore stack."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from svg_context.exceptions import StateUnderflowError
from svg_context.fills import FillType
from svg_context.fonts.font import Font
from svg_context.geometry.path import Path
from svg_context.geometry.rectangles import RectangleList
from svg_context.geometry.transform import AffineTransform


@dataclass
class GraphicsState:
    """One save/restore frame.

    ``active_group`` is a shared document node. ``open_groups`` holds only the
    named groups opened in this frame, so a fresh copy starts with none.
    """

    origin_offset: tuple[float, float] = (0.0, 0.0)
    transform: AffineTransform = field(default_factory=AffineTransform)
    clip_regions: RectangleList = field(default_factory=RectangleList)
    clip_path: Path = field(default_factory=Path)
    active_group: ET.Element | None = None
    open_groups: list[tuple[ET.Element, ET.Element | None]] = field(default_factory=list)
    fill: FillType = field(default_factory=FillType)
    gradient_ref: str | None = None
    font: Font = field(default_factory=Font)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def x_offset(self) -> float:
        return self.origin_offset[0]

    @property
    def y_offset(self) -> float:
        return self.origin_offset[1]

    def copy(self) -> GraphicsState:
        return GraphicsState(
            origin_offset=self.origin_offset,
            transform=self.transform,
            clip_regions=self.clip_regions.copy(),
            clip_path=self.clip_path.copy(),
            active_group=self.active_group,
            open_groups=[],
            fill=self.fill,
            gradient_ref=self.gradient_ref,
            font=self.font,
            tags=dict(self.tags),
        )


class StateStack:
    """LIFO stack of frames; the root frame can never be popped."""

    def __init__(self, root: GraphicsState) -> None:
        self._frames: list[GraphicsState] = [root]

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def current(self) -> GraphicsState:
        return self._frames[-1]

    def push(self) -> GraphicsState:
        self._frames.append(self.current.copy())
        return self.current

    def pop(self) -> GraphicsState:
        if len(self._frames) <= 1:
            raise StateUnderflowError()
        self._frames.pop()
        return self.current
