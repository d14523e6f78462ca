import sys

import pytest
from QSitterDebug.node_model import NodeSnapshot as N
from QSitterDebug.tree_search import Direction, search


def labeled_tree():
    """
    a
    +- b
    |  +- d
    |  +- e
    +- c
       +- f
    """
    return N("a", 0, 6, [
        N("b", 0, 2, [N("d", 0, 1), N("e", 1, 2)]),
        N("c", 2, 6, [N("f", 3, 4)]),
    ])


def visit_order(root, direction=Direction.FORWARD, depth_limit=None):
    seen = []

    def record(node, depth):
        seen.append((node.type, depth))
        return False

    assert search(root, record, direction, depth_limit) is None
    return seen


def test_forward_is_preorder_left_to_right():
    order = visit_order(labeled_tree())
    assert order == [("a", 0), ("b", 1), ("d", 2), ("e", 2), ("c", 1), ("f", 2)]


def test_backward_is_preorder_right_to_left():
    order = visit_order(labeled_tree(), Direction.BACKWARD)
    assert order == [("a", 0), ("c", 1), ("f", 2), ("b", 1), ("e", 2), ("d", 2)]


# fmt: off
@pytest.mark.parametrize(
    "types, direction, expected",
    [
        pytest.param({"d", "f"},      Direction.FORWARD,  "d", id="forward_leftmost_first"),
        pytest.param({"d", "f"},      Direction.BACKWARD, "f", id="backward_rightmost_first"),
        pytest.param({"b", "d"},      Direction.FORWARD,  "b", id="parent_before_child"),
        pytest.param({"c", "f"},      Direction.BACKWARD, "c", id="parent_before_child_backward"),
        pytest.param({"a", "f"},      Direction.FORWARD,  "a", id="root_is_eligible"),
        pytest.param({"e"},           Direction.BACKWARD, "e", id="single_match_backward"),
        pytest.param({"missing"},     Direction.FORWARD,  None, id="not_found"),
    ],
)
def test_first_match(types, direction, expected):
    found = search(labeled_tree(), lambda node, depth: node.type in types, direction)
    assert (found.type if found is not None else None) == expected
# fmt: on


def test_search_stops_at_first_match():
    calls = []

    def pred(node, depth):
        calls.append(node.type)
        return node.type == "d"

    search(labeled_tree(), pred)
    assert calls == ["a", "b", "d"]


def test_depth_limit_zero_only_evaluates_root():
    order = visit_order(labeled_tree(), depth_limit=0)
    assert order == [("a", 0)]


def test_depth_limit_stops_descent():
    order = visit_order(labeled_tree(), Direction.BACKWARD, depth_limit=1)
    assert order == [("a", 0), ("c", 1), ("b", 1)]


def test_depth_limit_hides_deeper_matches():
    found = search(labeled_tree(), lambda n, d: n.type == "f", depth_limit=1)
    assert found is None


def test_negative_depth_limit_rejected():
    with pytest.raises(ValueError):
        search(labeled_tree(), lambda n, d: False, depth_limit=-1)


def test_leaf_root():
    leaf = N("leaf", 0, 0)
    assert visit_order(leaf) == [("leaf", 0)]


def test_predicate_errors_propagate():
    class Boom(Exception):
        pass

    def pred(node, depth):
        if node.type == "e":
            raise Boom(node.type)
        return False

    with pytest.raises(Boom):
        search(labeled_tree(), pred)


def test_deep_tree_does_not_recurse():
    depth = sys.getrecursionlimit() * 3
    node = N("leaf", 0, 0)
    for _ in range(depth):
        node = N("wrap", 0, 0, [node])

    found = search(node, lambda n, d: n.type == "leaf")
    assert found is not None
    assert found.type == "leaf"

    depths = []
    search(node, lambda n, d: depths.append(d) or False)
    assert depths[-1] == depth
