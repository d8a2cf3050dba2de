import copy
import pickle

import pytest

from bytesbuf.bytes import Bytes


def test_slice_and_split_to_example():
    mem = Bytes("Hello world")
    a = mem.slice(0, 5)
    assert a == "Hello"
    b = mem.split_to(6)
    assert mem == "world"
    assert b == "Hello "


def test_new_is_empty():
    b = Bytes()
    assert b.is_empty()
    assert b.to_bytes() == b""
    assert len(b) == 0


def test_from_static_contents_and_not_unique():
    b = Bytes.from_static(b"hello")
    assert b.to_bytes() == b"hello"
    assert not b.is_unique()


def test_len():
    assert len(Bytes(b"hello")) == 5


def test_is_unique_after_clone_and_drop():
    a = Bytes(bytes([1, 2, 3]))
    assert a.is_unique()
    b = a.clone()
    assert not a.is_unique()
    assert b == a
    del b
    assert a.is_unique()


def test_copy_from_slice_copies():
    source = bytearray(b"abc")
    b = Bytes.copy_from_slice(source)
    source[0] = ord("z")
    assert b == b"abc"
    assert b.is_unique()


def test_copy_from_slice_rejects_str():
    with pytest.raises(TypeError):
        Bytes.copy_from_slice("abc")


def test_init_rejects_int():
    with pytest.raises(TypeError):
        Bytes(5)


def test_slice_middle():
    a = Bytes(b"hello world")
    assert a.slice(2, 5).to_bytes() == b"llo"


def test_slice_defaults_cover_everything():
    a = Bytes(b"hello world")
    assert a.slice() == a
    assert a.slice(6) == b"world"
    assert a.slice(None, 5) == b"hello"


def test_slice_empty_range():
    a = Bytes(b"hello")
    s = a.slice(3, 3)
    assert s.is_empty()
    assert a.is_unique()


def test_slice_start_after_end_raises():
    with pytest.raises(ValueError):
        Bytes(b"hello").slice(4, 2)


def test_slice_end_out_of_bounds_raises():
    with pytest.raises(IndexError):
        Bytes(b"hello").slice(0, 6)


def test_slice_ref():
    data = Bytes(b"012345678")
    subset = data.slice(2, 6)
    sub = data.slice_ref(subset)
    assert sub.to_bytes() == b"2345"


def test_slice_ref_empty_subset():
    data = Bytes(b"012345678")
    assert data.slice_ref(Bytes()).is_empty()


def test_slice_ref_foreign_storage_raises():
    data = Bytes(b"012345678")
    other = Bytes(b"012345678")
    with pytest.raises(ValueError):
        data.slice_ref(other.slice(1, 3))


def test_slice_ref_outside_raises():
    data = Bytes(b"012345678")
    inner = data.slice(2, 5)
    with pytest.raises(ValueError):
        inner.slice_ref(data.slice(0, 3))
    with pytest.raises(ValueError):
        inner.slice_ref(data.slice(3, 7))


def test_split_off():
    a = Bytes(b"hello world")
    b = a.split_off(5)
    assert a.to_bytes() == b"hello"
    assert b.to_bytes() == b" world"


def test_split_off_bounds():
    a = Bytes(b"abc")
    end = a.split_off(3)
    assert end.is_empty()
    assert a == b"abc"
    whole = a.split_off(0)
    assert whole == b"abc"
    assert a.is_empty()
    with pytest.raises(IndexError):
        whole.split_off(4)


def test_split_to():
    a = Bytes(b"hello world")
    b = a.split_to(5)
    assert a.to_bytes() == b" world"
    assert b.to_bytes() == b"hello"


def test_split_to_bounds():
    a = Bytes(b"abc")
    front = a.split_to(0)
    assert front.is_empty()
    assert a == b"abc"
    whole = a.split_to(3)
    assert whole == b"abc"
    assert a.is_empty()
    with pytest.raises(IndexError):
        whole.split_to(4)


def test_split_halves_join_to_original():
    data = b"the quick brown fox"
    for at in range(len(data) + 1):
        a = Bytes(data)
        b = a.split_off(at)
        assert a.to_bytes() + b.to_bytes() == data


def test_truncate():
    buf = Bytes(b"hello world")
    buf.truncate(5)
    assert buf == b"hello"


def test_truncate_longer_is_noop():
    buf = Bytes(b"hello")
    buf.truncate(10)
    assert buf == b"hello"


def test_truncate_static():
    buf = Bytes.from_static(b"hello world")
    buf.truncate(5)
    assert buf == b"hello"


def test_clear():
    buf = Bytes(b"hello world")
    buf.clear()
    assert buf.is_empty()


def test_clone_outlives_original():
    a = Bytes(b"shared")
    b = a.clone()
    del a
    assert b == b"shared"
    assert b.is_unique()


def test_advance_and_remaining():
    buf = Bytes(b"hello world")
    buf.advance(6)
    assert buf.remaining() == len(b"world")
    assert bytes(buf.chunk()) == b"world"


def test_advance_past_remaining_raises():
    buf = Bytes(b"abc")
    with pytest.raises(IndexError):
        buf.advance(4)
    assert buf == b"abc"


def test_copy_to_bytes_partial_and_full():
    buf = Bytes(b"hello world")
    head = buf.copy_to_bytes(5)
    assert head == b"hello"
    assert buf == b" world"
    rest = buf.copy_to_bytes(len(buf))
    assert rest == b" world"
    assert buf.is_empty()


def test_copy_to_bytes_too_long_raises():
    with pytest.raises(IndexError):
        Bytes(b"ab").copy_to_bytes(3)


def test_chunk_is_read_only():
    buf = Bytes(b"abc")
    view = buf.chunk()
    assert bytes(view) == b"abc"
    with pytest.raises(TypeError):
        view[0] = 1
    assert bytes(view) == b"abc"
    assert buf == b"abc"


def test_getitem_index_and_slice():
    b = Bytes(b"hello")
    assert b[0] == ord("h")
    assert b[-1] == ord("o")
    assert b[1:3] == b"el"
    assert b[::2] == b"hlo"
    with pytest.raises(IndexError):
        b[5]


def test_iteration():
    data = b"\x00\x01\xff"
    assert list(Bytes(data)) == list(data)


def test_bytes_conversion():
    assert bytes(Bytes(b"abc")) == b"abc"


def test_equality_with_various_types():
    b = Bytes(b"abc")
    assert b == Bytes(b"abc")
    assert b == b"abc"
    assert b == bytearray(b"abc")
    assert b == "abc"
    assert "abc" == b
    assert not (b == b"abd")
    assert not (b == 123)


def test_ordering():
    assert Bytes(b"a") < Bytes(b"b")
    assert Bytes(b"a") < b"ab"
    assert Bytes(b"b") > "a"
    assert Bytes(b"ab") >= Bytes(b"ab")
    items = [Bytes(b"c"), Bytes(b"a"), Bytes(b"b")]
    assert [x.to_bytes() for x in sorted(items)] == [b"a", b"b", b"c"]


def test_hash_matches_bytes():
    assert hash(Bytes(b"key")) == hash(b"key")
    assert len({Bytes(b"x"), Bytes(b"x").clone()}) == 1


def test_repr_escapes():
    assert repr(Bytes(b'a\n\r\t\\"\x00\xff')) == 'b"a\\n\\r\\t\\\\\\"\\0\\xff"'


def test_format_hex():
    b = Bytes(b"\x01\xab")
    assert format(b, "x") == "01ab"
    assert format(b, "X") == "01AB"
    assert format(b, "") == repr(b)
    with pytest.raises(ValueError):
        format(b, "d")


def test_pickle_round_trip():
    b = Bytes(b"payload").slice(1, 4)
    restored = pickle.loads(pickle.dumps(b))
    assert restored == b"ayl"
    assert restored.is_unique()


def test_copy_module_shares():
    a = Bytes(b"abc")
    b = copy.copy(a)
    assert b == a
    assert not a.is_unique()
    c = copy.deepcopy(a)
    assert c == a
    assert c.is_unique()