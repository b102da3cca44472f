"""This module represents the implementation of an ASCII Trie structure that
maps string keys to arbitrary values.

Every node owns a fixed array of 128 child slots, one per ASCII code point,
so an edge lookup is a single index operation.
"""

import logging
from collections.abc import ItemsView, Iterator
from typing import Any, Optional

ALPHABET_SIZE = 128

logger = logging.getLogger(__name__)


class InvalidKeyError(ValueError):
    """Raised when a key contains a character outside the ASCII alphabet."""

    def __init__(self, key: str, position: int) -> None:
        """Initialize the error from the offending key.

        Args:
            key (str): The rejected key.
            position (int): Index of the first non-ASCII character in `key`.

        """
        self.key = key
        self.position = position
        self.symbol = key[position]
        super().__init__(
            f"Key {key!r} contains the non-ASCII character {self.symbol!r} "
            f"(code point {ord(self.symbol)}) at position {position}.",
        )


class TrieNode:
    """Represent a node in the trie structure."""

    __slots__ = ("value", "is_end", "children", "child_count")

    def __init__(self) -> None:
        """Initialize a new, non-terminal Trie node.

        Attributes:
            value (Any): The value stored for the key ending here.
            is_end (bool): Indicates whether a stored key ends at this node.
            children (list): 128 slots mapping a code point to the
            corresponding child TrieNode, or None.
            child_count (int): Number of slots in `children` that are set.

        """
        self.value: Any = None
        self.is_end = False
        self.children: list[Optional[TrieNode]] = [None] * ALPHABET_SIZE
        self.child_count = 0


def _first_invalid_position(key: str) -> int:
    """Return the index of the first non-ASCII character of `key`, or -1."""
    for position, char in enumerate(key):
        if ord(char) >= ALPHABET_SIZE:
            return position
    return -1


def _validate_key(key: str) -> None:
    """Raise InvalidKeyError if `key` has characters outside the alphabet."""
    position = _first_invalid_position(key)
    if position != -1:
        raise InvalidKeyError(key, position)


class AsciiTrie:
    """Represents a mutable mapping from ASCII strings to values.

    The empty string is a valid key and is stored on the root node.
    The structure is not safe for concurrent mutation.
    """

    # Mutable container
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, track_size: bool = True) -> None:
        """Initialize an empty trie.

        Args:
            track_size (bool): Keep a running count of the stored keys so
            that `size()` is O(1). When False, `size()` walks the whole
            structure on every call.

        """
        self.root = TrieNode()
        self.track_size = track_size
        self._size = 0

    def put(self, key: Optional[str], value: Any) -> None:
        """Insert `key` with `value`, replacing the value of an existing key.

        A None key is ignored.

        Args:
            key (Optional[str]): The key to store.
            value (Any): The value associated with the key.

        Raises:
            InvalidKeyError: If `key` contains a non-ASCII character. The
            trie is left unmodified.

        """
        if key is None:
            return
        # Validate up front so no branch is created for a rejected key
        _validate_key(key)

        node = self.root
        for char in key:
            symbol = ord(char)
            child = node.children[symbol]
            if child is None:
                child = TrieNode()
                node.children[symbol] = child
                node.child_count += 1
            node = child

        if not node.is_end:
            node.is_end = True
            self._size += 1
        node.value = value

    def get(self, key: Optional[str], default: Any = None) -> Any:
        """Return the value stored for `key`.

        Args:
            key (Optional[str]): The key to look up.
            default (Any): Returned when the key is not stored.

        Returns:
            Any: The stored value, or `default` on a miss (including a None
            key, a non-ASCII key or a key that is only a prefix of others).

        """
        node = self._find_node(key)
        if node is None or not node.is_end:
            return default
        return node.value

    def contains_key(self, key: Optional[str]) -> bool:
        """Check whether `key` is stored, whatever its value is.

        Args:
            key (Optional[str]): The key to look up.

        Returns:
            bool: True if the exact `key` is present in the trie.

        """
        node = self._find_node(key)
        return node is not None and node.is_end

    def remove(self, key: Optional[str]) -> bool:
        """Remove `key` and prune the branch that only served it.

        The ancestors visited on the way down are kept on a stack. Once the
        key is unmarked, the stack is unwound from the deepest ancestor,
        detaching the child just left behind, until an ancestor is reached
        that still has other children or terminates another key.

        Args:
            key (Optional[str]): The key to remove.

        Raises:
            InvalidKeyError: If `key` contains a non-ASCII character.

        Returns:
            bool: True if the key was stored and has been removed.

        """
        if key is None:
            return False
        _validate_key(key)

        if not key:
            return self._unmark(self.root)

        node = self.root
        ancestors: list[TrieNode] = []
        for char in key:
            ancestors.append(node)
            child = node.children[ord(char)]
            # The key was never inserted
            if child is None:
                return False
            node = child

        if not self._unmark(node):
            return False

        if node.child_count == 0:
            pruned = 0
            for index in range(len(key) - 1, -1, -1):
                parent = ancestors[index]
                parent.children[ord(key[index])] = None
                parent.child_count -= 1
                pruned += 1
                if parent.child_count > 0 or parent.is_end:
                    break
            logger.debug("Pruned %d node(s) after removing %r", pruned, key)
        return True

    def clear(self) -> None:
        """Remove every key, dropping all subtrees of the root at once."""
        self.root.is_end = False
        self.root.value = None
        self.root.children = [None] * ALPHABET_SIZE
        self.root.child_count = 0
        self._size = 0
        logger.debug("Trie cleared")

    def is_empty(self) -> bool:
        """Return True if no key, not even the empty string, is stored."""
        return self.root.child_count == 0 and not self.root.is_end

    def size(self) -> int:
        """Return the number of distinct stored keys.

        Returns:
            int: The running counter when `track_size` is set, otherwise the
            number of end nodes found by a full traversal.

        """
        if self.track_size:
            return self._size
        return sum(1 for _ in self._iter_entries(self.root, ""))

    def key_set(self) -> set[str]:
        """Return the set of all stored keys."""
        return {key for key, _ in self._iter_entries(self.root, "")}

    def entry_set(self) -> ItemsView[str, Any]:
        """Return a set-like view of every `(key, value)` pair.

        The view supports set comparison and membership tests without
        requiring the values to be hashable.

        Returns:
            ItemsView[str, Any]: The stored entries.

        """
        return dict(self._iter_entries(self.root, "")).items()

    def starts_with(self, prefix: Optional[str]) -> ItemsView[str, Any]:
        """Return the entries whose key starts with `prefix`.

        If `prefix` is itself a stored key it is part of the result.

        Args:
            prefix (Optional[str]): The literal prefix to match.

        Returns:
            ItemsView[str, Any]: The matching entries; empty when no stored
            key has this prefix.

        """
        node = self._find_node(prefix)
        if node is None:
            return {}.items()
        return dict(self._iter_entries(node, prefix or "")).items()

    def keys(self) -> Iterator[str]:
        """Iterate over the stored keys in ascending symbol order."""
        for key, _ in self._iter_entries(self.root, ""):
            yield key

    def values(self) -> Iterator[Any]:
        """Iterate over the stored values in ascending key-symbol order."""
        for _, value in self._iter_entries(self.root, ""):
            yield value

    def items(self) -> Iterator[tuple[str, Any]]:
        """Iterate over the stored `(key, value)` pairs."""
        return self._iter_entries(self.root, "")

    def node_count(self) -> int:
        """Return the number of nodes in the structure, root included."""
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(child for child in node.children if child is not None)
        return count

    def structural_errors(self) -> list[str]:
        """Describe every broken structural invariant.

        Returns:
            list[str]: One message per dead node (a non-root leaf that
            terminates no key) and per node whose `child_count` does not
            match its occupied slots. Empty if the structure is sound.

        """
        errors: list[str] = []
        stack: list[tuple[TrieNode, str]] = [(self.root, "")]
        while stack:
            node, path = stack.pop()
            occupied = 0
            for symbol, child in enumerate(node.children):
                if child is not None:
                    occupied += 1
                    stack.append((child, path + chr(symbol)))
            if occupied != node.child_count:
                errors.append(
                    f"Node {path!r} has child_count {node.child_count} "
                    f"but {occupied} children",
                )
            if node is not self.root and occupied == 0 and not node.is_end:
                errors.append(f"Dead node {path!r}")
        return errors

    def _find_node(self, key: Optional[str]) -> Optional[TrieNode]:
        """Walk down the path of `key`.

        Returns:
            Optional[TrieNode]: The node reached, or None if the key is None,
            contains non-ASCII characters, or an edge is missing.

        """
        if key is None:
            return None
        node = self.root
        for char in key:
            symbol = ord(char)
            if symbol >= ALPHABET_SIZE:
                return None
            child = node.children[symbol]
            if child is None:
                return None
            node = child
        return node

    def _unmark(self, node: TrieNode) -> bool:
        """Clear the end flag and value of `node`.

        Returns:
            bool: True if `node` terminated a key before the call.

        """
        if not node.is_end:
            return False
        node.is_end = False
        node.value = None
        self._size -= 1
        return True

    def _iter_entries(
        self,
        start: TrieNode,
        prefix: str,
    ) -> Iterator[tuple[str, Any]]:
        """Yield the entries under `start` depth-first in symbol order.

        An explicit stack replaces recursion so that long keys cannot hit
        the interpreter's recursion limit. A single key buffer is extended
        when entering a child and shortened when leaving it.

        Args:
            start (TrieNode): The node the traversal starts from.
            prefix (str): The key spelled by the path leading to `start`.

        Yields:
            tuple[str, Any]: The `(key, value)` pairs of every end node.

        """
        buffer = list(prefix)
        if start.is_end:
            yield prefix, start.value

        # Each frame is a node and the next child slot to look at
        stack: list[tuple[TrieNode, int]] = [(start, 0)]
        while stack:
            node, next_symbol = stack.pop()
            for symbol in range(next_symbol, ALPHABET_SIZE):
                child = node.children[symbol]
                if child is None:
                    continue
                stack.append((node, symbol + 1))
                buffer.append(chr(symbol))
                if child.is_end:
                    yield "".join(buffer), child.value
                stack.append((child, 0))
                break
            else:
                # All children of `node` are done, leave it
                if node is not start:
                    buffer.pop()

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def __getitem__(self, key: str) -> Any:
        node = self._find_node(key)
        if node is None or not node.is_end:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: str, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __eq__(self, other: object) -> bool:
        """Compare two tries by their entries only.

        Insertion order and the internal node layout do not matter.
        """
        if self is other:
            return True
        if not isinstance(other, AsciiTrie):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    def __repr__(self) -> str:
        """Return the entries of the trie, one per line.

        Returns:
            str: A string such as ``AsciiTrie {\\n  "cat": 1\\n}``.

        """
        lines = ["AsciiTrie {"]
        for key, value in self.items():
            lines.append(f'\n  "{key}": {value}')
        lines.append("\n}")
        return "".join(lines)
