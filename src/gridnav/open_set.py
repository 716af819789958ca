# indexed binary min-heap for the A* frontier
# src/gridnav/open_set.py
"""
NodePriorityQueue: binary min-heap of Nodes with a position index.

Ordering:
- f_cost ascending
- ties broken by h_cost ascending (prefer nodes believed closer to the goal)

Two parallel containers back the queue:
- _heap: list of Nodes in heap order
- _slots: node position -> index into _heap

Every swap updates both, so membership is O(1) and a node whose key went
down can be repositioned in O(log n) without a linear search.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .node import Coord, Node


def _key(node: Node) -> Tuple[float, float]:
    return node.f_cost, node.h_cost


class NodePriorityQueue:
    """Open set for A*: insert / extract_min / decrease_key in O(log n)."""

    def __init__(self) -> None:
        self._heap: List[Node] = []
        self._slots: Dict[Coord, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, node: Node) -> bool:
        return self.contains(node)

    def contains(self, node: Node) -> bool:
        return node.position in self._slots

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, node: Node) -> None:
        """Append the node and sift it up into place."""
        if node.position in self._slots:
            raise ValueError(f"Node at {node.position} is already in the open set")
        self._heap.append(node)
        index = len(self._heap) - 1
        self._slots[node.position] = index
        self._sift_up(index)

    def extract_min(self) -> Node:
        """
        Remove and return the node with the smallest (f_cost, h_cost).

        Raises IndexError on an empty queue; callers check len() first.
        """
        if not self._heap:
            raise IndexError("extract_min from an empty open set")

        first = self._heap[0]
        last = self._heap.pop()
        del self._slots[first.position]

        if self._heap:
            # Move the former last node into the root and restore order.
            self._heap[0] = last
            self._slots[last.position] = 0
            self._sift_down(0)

        return first

    def decrease_key(self, node: Node) -> None:
        """
        Reposition a node whose g_cost/h_cost were just lowered.

        Keys only ever go down through this entry point, so sifting up is
        enough. Nodes that are not enqueued are ignored.
        """
        index = self._slots.get(node.position)
        if index is None:
            return
        self._sift_up(index)

    def peek(self) -> Optional[Node]:
        return self._heap[0] if self._heap else None

    def clear(self) -> None:
        self._heap.clear()
        self._slots.clear()

    # ------------------------------------------------------------------
    # Heap internals
    # ------------------------------------------------------------------

    def _sift_up(self, child: int) -> None:
        while child > 0:
            parent = (child - 1) // 2
            if not _key(self._heap[child]) < _key(self._heap[parent]):
                break
            self._swap(child, parent)
            child = parent

    def _sift_down(self, parent: int) -> None:
        count = len(self._heap)
        while True:
            left = 2 * parent + 1
            right = left + 1
            smallest = parent

            if left < count and _key(self._heap[left]) < _key(self._heap[smallest]):
                smallest = left
            if right < count and _key(self._heap[right]) < _key(self._heap[smallest]):
                smallest = right

            if smallest == parent:
                return

            self._swap(parent, smallest)
            parent = smallest

    def _swap(self, i: int, j: int) -> None:
        node_i = self._heap[i]
        node_j = self._heap[j]
        self._heap[i] = node_j
        self._heap[j] = node_i
        self._slots[node_i.position] = j
        self._slots[node_j.position] = i
