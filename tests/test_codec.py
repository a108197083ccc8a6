from emmet_bridge.editor import PositionCodec, offset_from_position, position_from_offset
from emmet_bridge.host import Position

TEXT = "ab\ncde\n\nf"


def test_to_position_walks_lines() -> None:
    codec = PositionCodec(TEXT)

    assert codec.to_position(0) == Position(0, 0)
    assert codec.to_position(2) == Position(0, 2)
    assert codec.to_position(3) == Position(1, 0)
    assert codec.to_position(6) == Position(1, 3)
    assert codec.to_position(7) == Position(2, 0)
    assert codec.to_position(8) == Position(3, 0)
    assert codec.to_position(9) == Position(3, 1)


def test_offset_round_trip_for_every_offset() -> None:
    codec = PositionCodec(TEXT)

    for offset in range(len(TEXT) + 1):
        assert codec.to_offset(codec.to_position(offset)) == offset


def test_position_round_trip_for_every_addressable_position() -> None:
    codec = PositionCodec(TEXT)

    for line, content in enumerate(TEXT.split("\n")):
        for column in range(len(content) + 1):
            position = Position(line, column)
            assert codec.to_position(codec.to_offset(position)) == position


def test_out_of_range_input_is_clamped() -> None:
    codec = PositionCodec(TEXT)

    assert codec.to_offset(Position(99, 0)) == len(TEXT)
    assert codec.to_offset(Position(-1, 5)) == 0
    assert codec.to_offset(Position(1, 99)) == 6
    assert codec.to_position(-4) == Position(0, 0)
    assert codec.to_position(100) == Position(3, 1)


def test_empty_document() -> None:
    codec = PositionCodec("")

    assert codec.line_count == 1
    assert codec.to_position(0) == Position(0, 0)
    assert codec.to_offset(Position(0, 0)) == 0


def test_module_helpers_use_current_text() -> None:
    assert offset_from_position("x\ny", Position(1, 1)) == 3
    assert position_from_offset("x\ny", 2) == Position(1, 0)
