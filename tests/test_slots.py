import pytest

from homebudget.slots import SlotList


def test_ids_are_stable_after_removal():
    slots = SlotList()
    a = slots.add("a")
    b = slots.add("b")
    c = slots.add("c")
    assert (a, b, c) == (0, 1, 2)
    slots.remove(b)
    assert slots.get(c) == "c"
    assert slots.get(b) is None
    assert len(slots) == 2
    assert list(slots) == ["a", "c"]
    assert slots.as_list() == ["a", None, "c"]


def test_ids_are_never_reused():
    slots = SlotList()
    first = slots.add("x")
    slots.remove(first)
    assert slots.add("y") == 1
    assert list(slots.items()) == [(1, "y")]


def test_replace_requires_live_slot():
    slots = SlotList.from_items(["a", None, "b"])
    assert slots.as_list() == ["a", "b"]
    slots.replace(1, "B")
    assert slots.values() == ["a", "B"]
    slots.remove(0)
    with pytest.raises(KeyError):
        slots.replace(0, "A")


def test_out_of_range_ids_are_ignored():
    slots = SlotList.from_items(["a"])
    slots.remove(5)
    assert slots.get(-1) is None
    assert len(slots) == 1
