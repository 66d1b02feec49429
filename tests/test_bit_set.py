import pytest

from pinexgw.bit_set import BitSet


def test_new_set_is_empty():
    bs = BitSet(10)
    assert bs.to_string() == "0" * 10
    assert bs.set_bits_indices() == []
    assert len(bs) == 10


def test_set_get_and_clear():
    bs = BitSet(130)
    bs.set(0)
    bs.set(64)
    bs.set(129)
    assert bs.get(0) and bs.get(64) and bs.get(129)
    assert not bs.get(1)
    bs.set(64, False)
    assert not bs.get(64)
    assert bs.set_bits_indices() == [0, 129]


def test_to_string_lowest_index_first():
    bs = BitSet(5)
    bs.set(1)
    bs.set(4)
    assert bs.to_string() == "01001"


def test_index_out_of_range():
    bs = BitSet(8)
    with pytest.raises(IndexError):
        bs.set(8)
    with pytest.raises(IndexError):
        bs.get(-1)


def test_shift_right_crosses_word_boundary():
    bs = BitSet(128)
    bs.set(63)
    bs.shift_right()
    assert bs.set_bits_indices() == [64]


def test_shift_right_drops_top_bit():
    bs = BitSet(64)
    bs.set(63)
    bs.shift_right()
    assert bs.set_bits_indices() == []


def test_shift_keeps_bits_beyond_size_within_word():
    bs = BitSet(3)
    bs.set(2)
    bs.shift_right()
    assert bs.to_string() == "000"
    assert bs.set_bits_indices() == [3]


def test_and_or():
    a = BitSet(70)
    b = BitSet(70)
    a.set(1)
    a.set(65)
    b.set(65)
    b.set(2)
    assert (a & b).set_bits_indices() == [65]
    assert (a | b).set_bits_indices() == [1, 2, 65]
    a &= b
    assert a.set_bits_indices() == [65]


def test_equality_and_copy():
    a = BitSet(20)
    a.set(7)
    b = a.copy()
    assert a == b
    b.set(8)
    assert a != b
    assert not a.get(8)


def test_mismatched_sizes_rejected():
    with pytest.raises(ValueError):
        BitSet(10) | BitSet(100)
    with pytest.raises(ValueError):
        BitSet(10).check_set_flags(BitSet(200))


def test_check_flags():
    state = BitSet(16)
    state.set(1)
    state.set(3)
    cond = BitSet(16)
    cond.set(1)
    assert state.check_set_flags(cond)
    assert not state.check_unset_flags(cond)
    other = BitSet(16)
    other.set(2)
    assert not state.check_set_flags(other)
    assert state.check_unset_flags(other)
    assert state.check_set_flags(BitSet(16))
    assert state.check_unset_flags(BitSet(16))