from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Tuple

from streettrees.errors import EmptyCollection, InvalidArgument


class Tree(ABC):
    """Abstract base class representing a tree structure."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the total number of elements in the tree."""
        pass

    def is_empty(self) -> bool:
        """Return True if the tree is empty."""
        return len(self) == 0

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Generate an iteration of the tree's elements."""
        pass


class OrderedTree(Tree):
    """
    Unbalanced binary search tree over any values supporting < and ==.

    Order-equal values are never stored twice: the first one inserted wins.
    Descents and traversals are iterative, so a degenerate chain built from
    sorted input does not hit the interpreter's recursion limit.
    """

    class _Node:
        """Node owning one element and its two child subtrees."""
        __slots__ = '_element', '_left', '_right'

        def __init__(self, e, left=None, right=None):
            self._element = e
            self._left = left
            self._right = right

        def get_element(self):
            return self._element

        def __repr__(self):
            return f"_Node({self._element!r})"

    def __init__(self):
        self._root: Optional[OrderedTree._Node] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        """Generate the stored elements in order (left, self, right)."""
        stack: List[OrderedTree._Node] = []
        walk = self._root
        while stack or walk is not None:
            while walk is not None:
                stack.append(walk)
                walk = walk._left
            walk = stack.pop()
            yield walk._element
            walk = walk._right

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __str__(self) -> str:
        return ", ".join(str(e) for e in self)

    # ------------------ Search helpers ------------------
    @staticmethod
    def _check_argument(value: Any) -> None:
        if value is None:
            raise InvalidArgument("tree operations do not accept None")

    def _find_position(self, k: Any) -> Tuple[Optional[_Node], Optional[_Node]]:
        """Finds the node equal to k, or None and the last node visited (potential parent)."""
        walk = self._root
        parent = None
        while walk is not None:
            e = walk._element
            if k == e:
                return walk, parent
            parent = walk
            walk = walk._left if k < e else walk._right
        return None, parent

    def _relink(self, parent: Optional[_Node], node: _Node, child: Optional[_Node]) -> None:
        """Replace node with child under parent (or at the root)."""
        if parent is None:
            self._root = child
        elif parent._left is node:
            parent._left = child
        else:
            parent._right = child

    # ------------------ Mutations ------------------
    def add(self, value: Any) -> bool:
        """Insert value at its leaf position. Returns False if an equal value is already stored."""
        self._check_argument(value)
        p, parent = self._find_position(value)
        if p is not None:
            return False

        node = self._Node(value)
        if parent is None:
            self._root = node
        elif value < parent._element:
            parent._left = node
        else:
            parent._right = node
        self._size += 1
        return True

    def remove(self, key: Any) -> bool:
        """Remove the value equal to key, using the in-order predecessor for two-child nodes."""
        self._check_argument(key)
        p, parent = self._find_position(key)
        if p is None:
            return False

        if p._left is not None and p._right is not None:
            # predecessor: rightmost node of the left subtree, it has no right child
            pred_parent = p
            pred = p._left
            while pred._right is not None:
                pred_parent = pred
                pred = pred._right
            p._element = pred._element
            self._relink(pred_parent, pred, pred._left)
        else:
            child = p._left if p._left is not None else p._right
            self._relink(parent, p, child)

        self._size -= 1
        return True

    # ------------------ Queries ------------------
    def contains(self, key: Any) -> bool:
        """Return True if a value equal to key is stored."""
        self._check_argument(key)
        p, _ = self._find_position(key)
        return p is not None

    def first(self) -> Any:
        """Return the minimum value."""
        if self._root is None:
            raise EmptyCollection("first() on an empty tree")
        walk = self._root
        while walk._left is not None:
            walk = walk._left
        return walk._element

    def last(self) -> Any:
        """Return the maximum value."""
        if self._root is None:
            raise EmptyCollection("last() on an empty tree")
        walk = self._root
        while walk._right is not None:
            walk = walk._right
        return walk._element

    def height(self) -> int:
        """Number of levels in the tree (0 when empty)."""
        levels = 0
        level = [self._root] if self._root is not None else []
        while level:
            levels += 1
            level = [c for n in level for c in (n._left, n._right) if c is not None]
        return levels
