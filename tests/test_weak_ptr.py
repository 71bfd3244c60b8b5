import gc

import pytest

from pxlkit.weak_ptr import WeakPtr


class Node:
    pass


class Leaf(Node):
    pass


def test_empty_pointer_is_invalid():
    ptr = WeakPtr()
    assert not ptr
    assert ptr.valid() is False
    assert ptr.pointer() is None
    with pytest.raises(ReferenceError):
        ptr.access()


def test_points_at_object():
    node = Node()
    ptr = WeakPtr(node)
    assert ptr.valid()
    assert ptr.pointer() is node
    assert ptr.access() is node
    assert ptr.object is node


def test_invalid_after_collection():
    node = Node()
    ptr = WeakPtr(node)
    del node
    gc.collect()
    assert not ptr.valid()
    with pytest.raises(ReferenceError):
        ptr.access()


def test_connect_rebinds_and_disconnects():
    a, b = Node(), Node()
    ptr = WeakPtr(a)
    ptr.connect(b)
    assert ptr.pointer() is b
    ptr.connect(None)
    assert ptr.pointer() is None


def test_copy_from_other_pointer():
    node = Node()
    original = WeakPtr(node)
    copied = WeakPtr(original)
    assert copied.pointer() is node
    assert copied == original


def test_equality_by_target():
    a, b = Node(), Node()
    assert WeakPtr(a) == WeakPtr(a)
    assert not (WeakPtr(a) == WeakPtr(b))
    assert WeakPtr() == WeakPtr()


def test_cast_matching_type():
    leaf = Leaf()
    ptr = WeakPtr(leaf)
    cast = ptr.cast(Leaf)
    assert cast.pointer() is leaf
    assert ptr.cast(Node).pointer() is leaf


def test_cast_wrong_type_returns_none():
    ptr = WeakPtr(Node())
    node = ptr.pointer()
    assert ptr.cast(Leaf) is None
    assert node is not None and isinstance(node, Node)


def test_unreferenceable_object_rejected():
    with pytest.raises(TypeError):
        WeakPtr(5)