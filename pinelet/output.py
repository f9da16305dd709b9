"""What a script produces on one bar: plots, drawings and log entries."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .values import Color


class LogLevel(Enum):
    """Severity of a log entry."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class LogEntry:
    """A log message with its level."""

    level: LogLevel
    message: str


@dataclass(kw_only=True)
class Label:
    """A label drawn on the chart."""

    x: float
    y: float
    text: str
    xloc: str
    yloc: str
    color: Optional[Color] = None
    style: str
    textcolor: Optional[Color] = None
    size: str
    textalign: str
    tooltip: Optional[str] = None
    text_font_family: str


@dataclass(kw_only=True)
class PineBox:
    """A box drawn on the chart."""

    left: float
    top: float
    right: float
    bottom: float
    border_color: Optional[Color] = None
    border_width: float
    border_style: str
    extend: str
    xloc: str
    bgcolor: Optional[Color] = None
    text: str
    text_size: float
    text_color: Optional[Color] = None
    text_halign: str
    text_valign: str
    text_wrap: str
    text_font_family: str


@dataclass(kw_only=True)
class Plot:
    """A plotted series value."""

    series: float
    title: str
    color: Optional[Color] = None
    linewidth: float
    style: str
    trackprice: bool
    histbase: float
    offset: float
    join: bool
    editable: bool
    show_last: Optional[float] = None
    display: str
    format: Optional[str] = None
    precision: Optional[float] = None
    force_overlay: bool
    linestyle: str


@dataclass(kw_only=True)
class Plotarrow:
    """An arrow plotted up or down according to the sign of the series."""

    series: float
    title: str
    colorup: Optional[Color] = None
    colordown: Optional[Color] = None
    offset: float
    minheight: float
    maxheight: float
    editable: bool
    show_last: Optional[float] = None
    display: str
    format: Optional[str] = None
    precision: Optional[float] = None
    force_overlay: bool


@dataclass(kw_only=True)
class Plotbar:
    """An OHLC bar plot."""

    open: float
    high: float
    low: float
    close: float
    title: str
    color: Optional[Color] = None
    editable: bool
    show_last: Optional[float] = None
    display: str
    format: Optional[str] = None
    precision: Optional[float] = None
    force_overlay: bool


@dataclass(kw_only=True)
class Plotcandle:
    """A candle plot."""

    open: float
    high: float
    low: float
    close: float
    title: str
    color: Optional[Color] = None
    wickcolor: Optional[Color] = None
    editable: bool
    show_last: Optional[float] = None
    bordercolor: Optional[Color] = None
    display: str
    format: Optional[str] = None
    precision: Optional[float] = None
    force_overlay: bool


@dataclass(kw_only=True)
class Plotchar:
    """A character plotted at a location."""

    series: float
    title: str
    char: str
    location: str
    color: Optional[Color] = None
    offset: float
    text: str
    textcolor: Optional[Color] = None
    editable: bool
    size: str
    show_last: Optional[float] = None
    display: str
    format: Optional[str] = None
    precision: Optional[float] = None
    force_overlay: bool


@dataclass(kw_only=True)
class Plotshape:
    """A shape plotted at a location."""

    series: float
    title: str
    style: str
    location: str
    color: Optional[Color] = None
    offset: float
    text: str
    textcolor: Optional[Color] = None
    editable: bool
    size: str
    show_last: Optional[float] = None
    display: str
    format: Optional[str] = None
    precision: Optional[float] = None
    force_overlay: bool


@dataclass
class PineOutput:
    """Collects everything a script emits during one execution."""

    plots: list = field(default_factory=list)
    plotarrows: list = field(default_factory=list)
    plotbars: list = field(default_factory=list)
    plotcandles: list = field(default_factory=list)
    plotchars: list = field(default_factory=list)
    plotshapes: list = field(default_factory=list)
    logs: list = field(default_factory=list)
    _labels: dict = field(default_factory=dict, repr=False)
    _next_label_id: int = field(default=0, repr=False)
    _boxes: dict = field(default_factory=dict, repr=False)
    _next_box_id: int = field(default=0, repr=False)

    def clear(self) -> None:
        """Drop all output and restart drawing ids from zero."""
        for collection in (
            self.plots,
            self.plotarrows,
            self.plotbars,
            self.plotcandles,
            self.plotchars,
            self.plotshapes,
            self.logs,
            self._labels,
            self._boxes,
        ):
            collection.clear()
        self._next_label_id = 0
        self._next_box_id = 0

    def copy(self) -> "PineOutput":
        """Return an independent copy of this output."""
        return _copy.deepcopy(self)

    def add_log(self, level: LogLevel, message: str) -> None:
        """Record a log message."""
        self.logs.append(LogEntry(level, message))

    def add_label(self, label: Label) -> int:
        """Store a label and return its id."""
        label_id = self._next_label_id
        self._next_label_id += 1
        self._labels[label_id] = label
        return label_id

    def get_label(self, label_id: int) -> Optional[Label]:
        """Return the label with the given id, or None."""
        return self._labels.get(label_id)

    def delete_label(self, label_id: int) -> bool:
        """Delete a label; return whether it existed."""
        return self._labels.pop(label_id, None) is not None

    def add_box(self, box: PineBox) -> int:
        """Store a box and return its id."""
        box_id = self._next_box_id
        self._next_box_id += 1
        self._boxes[box_id] = box
        return box_id

    def get_box(self, box_id: int) -> Optional[PineBox]:
        """Return the box with the given id, or None."""
        return self._boxes.get(box_id)

    def delete_box(self, box_id: int) -> bool:
        """Delete a box; return whether it existed."""
        return self._boxes.pop(box_id, None) is not None