import shutil
from abc import abstractmethod
from collections import deque
from collections.abc import Callable, Collection, Iterable
from typing import Any, cast, Generic, Optional, Protocol, TypeVar


class NumericKeyType(Protocol):
    @abstractmethod
    def __lt__(self, other: Any, /) -> bool: ...
    @abstractmethod
    def __gt__(self, other: Any, /) -> bool: ...


T = TypeVar('T', bound=NumericKeyType)


class BstTreeNode(Generic[T]):
    __slots__ = 'key', 'left', 'right'

    def __init__(self, key: T, left: 'None | BstTreeNode[T]' = None, right: 'None | BstTreeNode[T]' = None):
        self.key: T = key
        # None means there is no subtree on that side
        self.left: 'None | BstTreeNode[T]' = left
        self.right: 'None | BstTreeNode[T]' = right

    def __str__(self):
        return f'{self.__class__.__name__}({self.key})'

    def __repr__(self):
        return str(self)

    def get_children(self) -> tuple['BstTreeNode[T]', ...]:
        """Get a tuple of this node's children. May have 0, 1, or 2 elements. If it has 2 children, the returned order
        will always be (left, right).
        """
        return tuple(i for i in [self.left, self.right] if i is not None)

    def _calculate_height(self) -> int:
        """Returns the number of child edges on the longest path down to a leaf, counted level by level. This should
        only be used for testing since it does not share any code with BstTree.height.
        """
        height = 0
        next_level = list(self.get_children())
        while next_level:
            height += 1
            next_level = [n for node in next_level for n in node.get_children()]
        return height


Visitor = Callable[[BstTreeNode], Any]


class BstTree(Collection, Generic[T]):
    """Binary search tree over unique numeric keys.

    The tree is built balanced from its initial values. Inserts and deletes do not keep it balanced; call rebalance()
    to rebuild a balanced shape on demand.
    """
    __slots__ = ('_root',)

    MIN_PRINT_WIDTH = 8

    def __init__(self, init: Optional[Iterable[T]] = None):
        """Build a balanced tree from an iterable of numbers. Duplicates are dropped and the rest sorted first."""
        self._root: 'None | BstTreeNode[T]' = None
        if init is not None:
            self._root = self._build_tree(sorted(set(init)))

    def __len__(self):
        return sum(1 for _ in self.__in_order_nodes())

    def __iter__(self):
        """Iterate over the keys in ascending order."""
        for node in self.__in_order_nodes():
            yield node.key

    def __contains__(self, x):
        return self.find(x) is not None

    def __eq__(self, other):
        # trees are equal if they hold the same keys; the shape does not matter
        if not isinstance(other, BstTree):
            return False
        try:
            for selfi, otheri in zip(self, other, strict=True):
                if selfi != otheri:
                    return False
        except ValueError:
            # they are not the same length
            return False
        return True

    def __str__(self):
        return f'{self.__class__.__name__}({str(list(self))})'

    def __repr__(self):
        return str(self)

    @property
    def root(self) -> 'None | BstTreeNode[T]':
        return self._root

    def is_empty(self) -> bool:
        return self._root is None

    def _build_tree(self, keys: list[T]) -> 'None | BstTreeNode[T]':
        """Build a balanced subtree from sorted, unique keys and return its root (None if there are no keys)."""
        return self.__build_range(keys, 0, len(keys) - 1)

    def __build_range(self, keys: list[T], start: int, end: int) -> 'None | BstTreeNode[T]':
        if start > end:
            return None
        # floor division puts the lower middle key at the root of even length ranges
        mid = (start + end) // 2
        node = BstTreeNode(keys[mid])
        node.left = self.__build_range(keys, start, mid - 1)
        node.right = self.__build_range(keys, mid + 1, end)
        return node

    def __in_order_nodes(self):
        stack: list[BstTreeNode[T]] = []
        node = self._root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
            else:
                node = stack.pop()
                yield node
                node = node.right

    def insert(self, value: T):
        """Insert a value into the tree. Nothing happens if the value is already present. Does not rebalance."""
        self._root = self.__insert(self._root, value)

    def __insert(self, node: 'None | BstTreeNode[T]', value: T) -> 'BstTreeNode[T]':
        """Insert into the subtree at node and return the subtree's root so the caller can relink it."""
        if node is None:
            return BstTreeNode(value)
        if value < node.key:
            node.left = self.__insert(node.left, value)
        elif value > node.key:
            node.right = self.__insert(node.right, value)
        return node

    def delete_item(self, value: T):
        """Delete a value from the tree. Nothing happens if the value is not present."""
        self._root = self.__delete(self._root, value)

    def __delete(self, node: 'None | BstTreeNode[T]', value: T) -> 'None | BstTreeNode[T]':
        """Delete from the subtree at node and return the subtree's new root."""
        if node is None:
            return None
        if value < node.key:
            node.left = self.__delete(node.left, value)
        elif value > node.key:
            node.right = self.__delete(node.right, value)
        elif node.left is None:
            # right may be None too, in which case the node is a leaf and simply goes away
            return node.right
        elif node.right is None:
            return node.left
        else:
            # two children: take the successor's key, then remove the successor from the right subtree
            # the successor has no left child, so that removal never reaches this case again
            successor = self.__get_successor(node)
            node.key = successor.key
            node.right = self.__delete(node.right, successor.key)
        return node

    @staticmethod
    def __get_successor(node: 'BstTreeNode[T]') -> 'BstTreeNode[T]':
        """Get the least node in the right subtree. Only valid for nodes with a right child."""
        child = cast(BstTreeNode[T], node.right)
        while child.left is not None:
            child = child.left
        return child

    def find(self, value: T) -> 'None | BstTreeNode[T]':
        """Return the node holding value, or None if it is not in the tree."""
        return self.__find(self._root, value)

    def __find(self, node: 'None | BstTreeNode[T]', value: T) -> 'None | BstTreeNode[T]':
        if node is None:
            return None
        if value < node.key:
            return self.__find(node.left, value)
        if value > node.key:
            return self.__find(node.right, value)
        return node

    def height(self, value: T) -> Optional[int]:
        """Return the edge count of the longest path from the node holding value down to a leaf (0 for a leaf), or
        None if value is not in the tree.
        """
        node = self.find(value)
        if node is None:
            return None
        return self.__height(node)

    def __height(self, node: 'None | BstTreeNode[T]') -> int:
        # an empty subtree is one edge shorter than a leaf
        if node is None:
            return -1
        return max(self.__height(node.left), self.__height(node.right)) + 1

    def depth(self, value: T) -> Optional[int]:
        """Return the edge count from the root to the node holding value, or None if value is not in the tree."""
        node = self._root
        edges = 0
        while node is not None:
            if value < node.key:
                node = node.left
            elif value > node.key:
                node = node.right
            else:
                return edges
            edges += 1
        return None

    @staticmethod
    def __check_callback(callback: Visitor):
        if not callable(callback):
            raise TypeError(f'Traversal callback must be callable, got {type(callback).__name__}')

    def level_order_for_each(self, callback: Visitor):
        """Call callback on every node, breadth first, left to right within a level."""
        self.__check_callback(callback)
        if self._root is None:
            return
        queue: deque[BstTreeNode[T]] = deque([self._root])
        while queue:
            node = queue.popleft()
            callback(node)
            queue.extend(node.get_children())

    def in_order_for_each(self, callback: Visitor):
        """Call callback on every node in ascending key order."""
        self.__check_callback(callback)
        self.__in_order(self._root, callback)

    def pre_order_for_each(self, callback: Visitor):
        """Call callback on every node before its subtrees (node, left, right)."""
        self.__check_callback(callback)
        self.__pre_order(self._root, callback)

    def post_order_for_each(self, callback: Visitor):
        """Call callback on every node after its subtrees (left, right, node)."""
        self.__check_callback(callback)
        self.__post_order(self._root, callback)

    def __in_order(self, node: 'None | BstTreeNode[T]', callback: Visitor):
        if node is None:
            return
        self.__in_order(node.left, callback)
        callback(node)
        self.__in_order(node.right, callback)

    def __pre_order(self, node: 'None | BstTreeNode[T]', callback: Visitor):
        if node is None:
            return
        callback(node)
        self.__pre_order(node.left, callback)
        self.__pre_order(node.right, callback)

    def __post_order(self, node: 'None | BstTreeNode[T]', callback: Visitor):
        if node is None:
            return
        self.__post_order(node.left, callback)
        self.__post_order(node.right, callback)
        callback(node)

    def get_traversal_order(self, traversal: Callable[[Visitor], None]) -> list[T]:
        """Run one of the *_for_each traversal methods (bound to a tree) and return the visited keys in order."""
        keys: list[T] = []
        traversal(lambda node: keys.append(node.key))
        return keys

    def is_balanced(self) -> bool:
        """Return True if, at every node, the heights of the left and right subtrees differ by at most 1."""
        balanced, _ = self.__check_balance(self._root)
        return balanced

    def __check_balance(self, node: 'None | BstTreeNode[T]') -> tuple[bool, int]:
        """Return (balanced, height) for the subtree at node. Stops walking as soon as an imbalance is found."""
        if node is None:
            return True, -1
        left_balanced, left_height = self.__check_balance(node.left)
        if not left_balanced:
            return False, left_height + 1
        right_balanced, right_height = self.__check_balance(node.right)
        if not right_balanced:
            return False, right_height + 1
        return abs(left_height - right_height) <= 1, max(left_height, right_height) + 1

    def rebalance(self):
        """Rebuild the tree into a balanced shape from its current keys."""
        # in order keys are already sorted and unique
        keys = self.get_traversal_order(self.in_order_for_each)
        self._root = self._build_tree(keys)

    def render(self, max_width: int, truncate_text: str = '..') -> list[str]:
        """Return the lines of a sideways drawing of the tree: the root at the left edge, right subtrees above their
        parent and left subtrees below. Lines longer than max_width are cut and end with truncate_text.
        """
        lines: list[str] = []
        if self._root is not None:
            self.__render(self._root, '', True, lines)
        if any(len(line) > max_width for line in lines):
            keep = max(max_width - len(truncate_text), 0)
            lines = [line if len(line) <= max_width else line[:keep] + truncate_text for line in lines]
        return lines

    def __render(self, node: 'BstTreeNode[T]', prefix: str, is_left: bool, lines: list[str]):
        if node.right is not None:
            self.__render(node.right, prefix + ('│   ' if is_left else '    '), False, lines)
        lines.append(prefix + ('└── ' if is_left else '┌── ') + str(node.key))
        if node.left is not None:
            self.__render(node.left, prefix + ('    ' if is_left else '│   '), True, lines)

    def pretty_print(self, max_width=None, truncate_text='..'):
        """Print the tree to command line, sideways.

        max_width is the amount of space available to print each line; None (the default) uses the current console
        width. Longer lines are cut and end in truncate_text.
        """
        if max_width is None:
            max_width = shutil.get_terminal_size((120, 24)).columns
        if max_width < self.MIN_PRINT_WIDTH:
            print(f'Can\'t print tree; available width of {max_width} needs to be at least {self.MIN_PRINT_WIDTH}')
            return
        if self._root is None:
            print(str(self))
            return
        for line in self.render(max_width, truncate_text):
            print(line)

    @staticmethod
    def test(iters=1, iters_per_iter=1000, delete_prob=.1, print_time=True, print_tree=False):
        """Run tests. Will throw an AssertionError if there is an error."""
        import random
        import time
        start_time = time.time()
        for _ in range(iters):
            initial = [random.randint(-1000, 1000) for _ in range(random.randint(0, 50))]
            vals: set[int] = set(initial)
            tree: BstTree[int] = BstTree(initial)
            # a freshly built tree is balanced and sorted
            assert(tree.is_balanced())
            assert(list(tree) == sorted(vals))
            # insert and delete a group of keys, adding them both to the tree and to a set
            for _ in range(iters_per_iter):
                delete = random.random() <= delete_prob
                if delete:
                    if len(vals) > 0:
                        val = random.choice(tuple(vals))
                        tree.delete_item(val)
                        vals.remove(val)
                        assert(tree.find(val) is None)
                else:
                    val = random.randint(-100000, 100000)
                    tree.insert(val)
                    vals.add(val)
                    assert(cast(BstTreeNode[int], tree.find(val)).key == val)
            assert(len(tree) == len(vals))
            assert(list(tree) == sorted(vals))
            tree.rebalance()
            assert(tree.is_balanced())
            assert(list(tree) == sorted(vals))
            if print_tree:
                tree.pretty_print()
            # check every node's key ordering, height and depth against a plain level by level walk
            level = [tree.root] if tree.root is not None else []
            depth = 0
            while level:
                for node in level:
                    if node.left is not None:
                        assert(node.left.key < node.key)
                    if node.right is not None:
                        assert(node.right.key > node.key)
                    assert(tree.height(node.key) == node._calculate_height())
                    assert(tree.depth(node.key) == depth)
                level = [n for node in level for n in node.get_children()]
                depth += 1
            for val in vals:
                # the value should be found, and be able to be deleted
                assert(val in tree)
                tree.delete_item(val)
                assert(val not in tree)
                assert(tree.height(val) is None)
                assert(tree.depth(val) is None)
            # after deleting everything, the tree should be empty
            assert(len(tree) == 0)
            assert(tree.is_empty())
            assert(list(tree) == [])
            assert(bool(tree) == False)
            assert(tree.is_balanced())
        end_time = time.time()
        total_time = end_time - start_time
        if print_time:
            print(f'Test successful with {iters} iterations and {iters_per_iter} steps per iteration')
            print(f'Total time of {total_time:.2f}s and average time of {(total_time / iters):.2f}s per iteration')


if __name__ == '__main__':
    BstTree.test()
