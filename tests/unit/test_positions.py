"""Tests for the FileSet position translator."""

import pytest

from shadowcheck.positions import NO_POS, FileSet, Position


def make_fset() -> FileSet:
    fset = FileSet()
    fset.add_file("a.go", 20, (0, 8, 15))
    fset.add_file("b.go", 10, (0, 4))
    return fset


def test_bases_are_assigned_sequentially() -> None:
    fset = make_fset()
    a, b = fset.files
    assert a.base == 1
    assert b.base == 22  # 1 + 20 + 1


def test_position_line_and_column_are_one_based() -> None:
    fset = make_fset()
    a = fset.files[0]

    assert fset.position(a.base) == Position("a.go", 0, 1, 1)
    assert fset.position(a.base + 9) == Position("a.go", 9, 2, 2)
    assert fset.position(a.base + 15) == Position("a.go", 15, 3, 1)


def test_position_in_second_file() -> None:
    fset = make_fset()
    b = fset.files[1]

    position = fset.position(b.base + 5)

    assert position.filename == "b.go"
    assert (position.line, position.column) == (2, 2)
    assert str(position) == "b.go:2:2"


def test_end_of_file_position_belongs_to_the_file() -> None:
    fset = make_fset()
    a = fset.files[0]
    assert fset.file(a.base + a.size) is a


def test_no_pos_and_gaps_are_invalid() -> None:
    fset = make_fset()
    assert fset.file(NO_POS) is None
    assert not fset.position(NO_POS).is_valid
    assert fset.file(10_000) is None
    assert str(fset.position(10_000)) == "-"


def test_line_pos_round_trips_through_position() -> None:
    fset = make_fset()
    a = fset.files[0]

    pos = a.line_pos(3, 4)

    assert fset.position(pos) == Position("a.go", 18, 3, 4)


def test_line_pos_rejects_unknown_line() -> None:
    a = make_fset().files[0]
    with pytest.raises(ValueError, match="out of range"):
        a.line_pos(4)


@pytest.mark.parametrize(
    ("size", "line_starts", "message"),
    [
        (-1, (0,), "non-negative"),
        (10, (), "begin with offset 0"),
        (10, (1, 4), "begin with offset 0"),
        (10, (0, 4, 4), "strictly ascending"),
    ],
)
def test_add_file_validates_input(size: int, line_starts: tuple[int, ...], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        FileSet().add_file("bad.go", size, line_starts)


def test_offset_outside_file_raises() -> None:
    a = make_fset().files[0]
    with pytest.raises(ValueError, match="outside file"):
        a.offset(a.base + a.size + 1)
