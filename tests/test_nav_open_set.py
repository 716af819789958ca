"""
Unit tests for gridnav.open_set.NodePriorityQueue.

Covers:
- (f_cost, h_cost) ordering
- membership index
- decrease_key repositioning
- heap/index consistency under random operation sequences
"""

from __future__ import annotations

import random
from typing import Dict

import pytest

from gridnav import Node, NodePriorityQueue
from gridnav.node import Coord


def make_node(x: int, g: int, h: int) -> Node:
    node = Node(position=(x, 0))
    node.g_cost = g
    node.h_cost = h
    return node


def assert_index_consistent(queue: NodePriorityQueue) -> None:
    assert len(queue._heap) == len(queue._slots)
    for slot, node in enumerate(queue._heap):
        assert queue._slots[node.position] == slot


def test_extract_min_orders_by_f_cost() -> None:
    queue = NodePriorityQueue()
    for x, (g, h) in enumerate([(30, 10), (0, 5), (20, 20), (10, 10)]):
        queue.insert(make_node(x, g, h))

    order = [queue.extract_min().f_cost for _ in range(4)]

    assert order == [5, 20, 40, 40]
    assert len(queue) == 0


def test_ties_on_f_cost_prefer_smaller_h_cost() -> None:
    queue = NodePriorityQueue()
    far = make_node(0, 10, 30)
    near = make_node(1, 30, 10)
    queue.insert(far)
    queue.insert(near)

    assert queue.extract_min() is near
    assert queue.extract_min() is far


def test_contains_follows_insert_and_extract() -> None:
    queue = NodePriorityQueue()
    node = make_node(0, 0, 0)

    assert node not in queue
    queue.insert(node)
    assert node in queue
    assert queue.contains(node)

    queue.extract_min()
    assert node not in queue


def test_decrease_key_moves_node_to_front() -> None:
    queue = NodePriorityQueue()
    nodes = [make_node(x, 100 + x, 0) for x in range(8)]
    for node in nodes:
        queue.insert(node)

    target = nodes[6]
    target.g_cost = 1
    queue.decrease_key(target)

    assert queue.peek() is target
    assert_index_consistent(queue)
    assert queue.extract_min() is target


def test_decrease_key_on_absent_node_is_ignored() -> None:
    queue = NodePriorityQueue()
    queue.insert(make_node(0, 5, 5))

    queue.decrease_key(make_node(9, 0, 0))

    assert len(queue) == 1
    assert_index_consistent(queue)


def test_extract_from_empty_queue_raises() -> None:
    queue = NodePriorityQueue()
    with pytest.raises(IndexError):
        queue.extract_min()
    assert queue.peek() is None


def test_double_insert_is_rejected() -> None:
    queue = NodePriorityQueue()
    node = make_node(0, 0, 0)
    queue.insert(node)
    with pytest.raises(ValueError):
        queue.insert(node)


def test_equal_keys_do_not_break_the_heap() -> None:
    queue = NodePriorityQueue()
    for x in range(20):
        queue.insert(make_node(x, 10, 10))

    seen = set()
    while queue:
        node = queue.extract_min()
        assert node.f_cost == 20
        seen.add(node.position)
        assert_index_consistent(queue)

    assert len(seen) == 20


def test_clear_empties_heap_and_index() -> None:
    queue = NodePriorityQueue()
    queue.insert(make_node(0, 1, 1))
    queue.insert(make_node(1, 2, 2))

    queue.clear()

    assert len(queue) == 0
    assert not queue
    assert_index_consistent(queue)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_random_operations_match_sorted_reference(seed: int) -> None:
    rng = random.Random(seed)
    queue = NodePriorityQueue()
    enqueued: Dict[Coord, Node] = {}
    next_x = 0

    for _ in range(400):
        op = rng.random()
        if op < 0.45 or not enqueued:
            node = make_node(next_x, rng.randint(0, 200), rng.randint(0, 60))
            next_x += 1
            queue.insert(node)
            enqueued[node.position] = node
        elif op < 0.75:
            expected = min((n.f_cost, n.h_cost) for n in enqueued.values())
            node = queue.extract_min()
            assert (node.f_cost, node.h_cost) == expected
            del enqueued[node.position]
        else:
            node = rng.choice(list(enqueued.values()))
            node.g_cost = max(0, node.g_cost - rng.randint(1, 50))
            queue.decrease_key(node)

        assert len(queue) == len(enqueued)
        assert_index_consistent(queue)

    # Drain: pop order must be non-decreasing in key.
    keys = []
    while queue:
        node = queue.extract_min()
        keys.append((node.f_cost, node.h_cost))
    assert keys == sorted(keys)
