import io

import pytest

from wclkit.stack import Stack


def test_push_and_top():
    s = Stack()
    s.push("a")
    s.push("b")
    assert s.top() == "b"
    assert len(s) == 2


def test_top_of_empty_is_none():
    assert Stack().top() is None


def test_pop_removes_top():
    s = Stack()
    s.push("a")
    s.push("b")
    s.pop()
    assert s.top() == "a"
    assert len(s) == 1


def test_pop_empty_raises():
    with pytest.raises(IndexError, match="empty stack"):
        Stack().pop()


def test_is_empty():
    s = Stack()
    assert s.is_empty()
    s.push(1)
    assert not s.is_empty()
    s.pop()
    assert s.is_empty()


def test_swap_with_empty():
    a = Stack()
    b = Stack()
    a.push(1)
    a.push(2)
    a.swap(b)
    assert a.is_empty()
    assert b.top() == 2
    assert len(b) == 2


def test_swap_both_filled():
    a = Stack()
    b = Stack()
    a.push("x")
    b.push("y")
    b.push("z")
    a.swap(b)
    assert a.top() == "z" and len(a) == 2
    assert b.top() == "x" and len(b) == 1


def test_set_and_get():
    s = Stack()
    s.push("a")
    s.push("b")
    s.set(0, "c")
    assert s.get(0) == "c"
    assert s.get(1) == "b"


@pytest.mark.parametrize("idx", [-1, 2, 10])
def test_get_out_of_range_is_none(idx):
    s = Stack()
    s.push("a")
    s.push("b")
    assert s.get(idx) is None


@pytest.mark.parametrize("idx", [-1, 1])
def test_set_out_of_range_raises(idx):
    s = Stack()
    s.push("a")
    with pytest.raises(IndexError, match="Set failed"):
        s.set(idx, "x")


def test_set_on_empty_raises():
    with pytest.raises(IndexError):
        Stack().set(0, "x")


def test_dump_top_first():
    s = Stack()
    s.push("a")
    s.push("b")
    out = io.StringIO()
    s.dump(out)
    assert out.getvalue() == "1 => b\n0 => a\n"