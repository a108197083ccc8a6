"""Editor adapter: offsets, selections, tab stops, indentation and the engine context."""

from .codec import PositionCodec, offset_from_position, position_from_offset
from .selection import SelectionIndexError, SelectionModel, SelectionRange, SelectionSet
from .tabstops import CARET_GROUP, TabStop, TabStopData, extract
from .indentation import indent_unit_for, line_padding, normalize, pad, reindent
from .syntax import MODE_MAP, detect_profile, detect_syntax, map_mode
from .context import EditingContext

__all__ = [
    "PositionCodec",
    "offset_from_position",
    "position_from_offset",
    "SelectionRange",
    "SelectionSet",
    "SelectionModel",
    "SelectionIndexError",
    "CARET_GROUP",
    "TabStop",
    "TabStopData",
    "extract",
    "indent_unit_for",
    "line_padding",
    "normalize",
    "pad",
    "reindent",
    "MODE_MAP",
    "map_mode",
    "detect_syntax",
    "detect_profile",
    "EditingContext",
]
