import pytest

from bistro.sim.waitlist import WaitingQueue


def test_fifo_order():
    q = WaitingQueue(3)
    q.push("a")
    q.push("b")
    assert q.pop() == "a"
    assert q.pop() == "b"
    assert q.pop() is None


def test_capacity_and_duplicates():
    q = WaitingQueue(2)
    q.push("a")
    with pytest.raises(ValueError):
        q.push("a")
    q.push("b")
    assert q.is_full()
    with pytest.raises(ValueError):
        q.push("c")
    assert len(q) == 2
    assert "c" not in q


def test_remove_keeps_order():
    q = WaitingQueue(3)
    for name in ("a", "b", "c"):
        q.push(name)
    assert q.remove("b")
    assert not q.remove("b")
    assert "b" not in q
    assert q.names() == ["a", "c"]
