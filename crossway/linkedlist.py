"""A doubly linked list whose nodes keep their identity while being moved.

The list has two sentinel nodes, a head before the first element and a
tail after the last one.  Nodes can be spliced between lists, sorted in
place and removed in constant time.  Ordering functions take a LESS
callable that returns true when its first argument is less than its
second.
"""


class Node:
    """One element of a DList, holding VALUE."""

    __slots__ = ("value", "_prev", "_next", "_list", "_sentinel")

    def __init__(self, value=None):
        self.value = value
        self._prev = None
        self._next = None
        self._list = None
        self._sentinel = False

    @property
    def next(self):
        """The following node, or None at the end of the list."""
        nxt = self._next
        return None if nxt is None or nxt._sentinel else nxt

    @property
    def prev(self):
        """The preceding node, or None at the start of the list."""
        prv = self._prev
        return None if prv is None or prv._sentinel else prv

    @property
    def owner(self):
        """The DList this node belongs to, or None if it is detached."""
        return self._list

    def __repr__(self):
        return f"Node({self.value!r})"


class DList:
    """A doubly linked list of values."""

    def __init__(self, iterable=None):
        self._head = Node()
        self._tail = Node()
        for sentinel in (self._head, self._tail):
            sentinel._sentinel = True
            sentinel._list = self
        self._head._next = self._tail
        self._tail._prev = self._head
        if iterable is not None:
            for value in iterable:
                self.push_back(value)

    def __repr__(self):
        return f"DList({list(self)!r})"

    # Internal linking.

    def _owns(self, node):
        return node._list is self and not node._sentinel

    def _link_before(self, before, node):
        node._prev = before._prev
        node._next = before
        before._prev._next = node
        before._prev = node
        node._list = self

    def _unlink(self, node):
        nxt = node._next
        node._prev._next = nxt
        nxt._prev = node._prev
        node._prev = None
        node._next = None
        node._list = None
        return nxt

    def _before_node(self, before):
        if before is None:
            return self._tail
        if not self._owns(before):
            raise ValueError("node does not belong to this list")
        return before

    # Insertion.

    def push_front(self, value):
        """Insert VALUE at the front and return its node."""
        node = Node(value)
        self._link_before(self._head._next, node)
        return node

    def push_back(self, value):
        """Insert VALUE at the back and return its node."""
        node = Node(value)
        self._link_before(self._tail, node)
        return node

    def insert(self, before, value):
        """Insert VALUE just before node BEFORE and return its node.

        BEFORE of None inserts at the back.
        """
        before_node = self._before_node(before)
        node = Node(value)
        self._link_before(before_node, node)
        return node

    def splice(self, before, first, last):
        """Move nodes FIRST up to LAST (exclusive) to just before BEFORE.

        FIRST and LAST may belong to another list; LAST of None means the
        end of FIRST's list and BEFORE of None means the end of this list.
        """
        before_node = self._before_node(before)
        source = first._list
        if source is None or first._sentinel:
            raise ValueError("first node is not in a list")
        if last is None:
            last_node = source._tail
        elif last._list is source:
            last_node = last
        else:
            raise ValueError("first and last nodes are in different lists")
        if first is last_node:
            return

        moved = []
        node = first
        while node is not last_node:
            if node is source._tail:
                raise ValueError("last node does not follow first node")
            moved.append(node)
            node = node._next
        if any(node is before_node for node in moved):
            raise ValueError("cannot splice a range before one of its own nodes")

        final = moved[-1]
        first._prev._next = last_node
        last_node._prev = first._prev

        first._prev = before_node._prev
        final._next = before_node
        before_node._prev._next = first
        before_node._prev = final
        for node in moved:
            node._list = self

    # Removal.

    def remove(self, node):
        """Remove NODE from the list and return the node that followed it.

        Returns None if NODE was the last node.
        """
        if not self._owns(node):
            raise ValueError("node does not belong to this list")
        nxt = self._unlink(node)
        return None if nxt._sentinel else nxt

    def pop_front(self):
        """Remove and return the front value."""
        node = self._head._next
        if node._sentinel:
            raise IndexError("pop from empty list")
        self._unlink(node)
        return node.value

    def pop_back(self):
        """Remove and return the back value."""
        node = self._tail._prev
        if node._sentinel:
            raise IndexError("pop from empty list")
        self._unlink(node)
        return node.value

    # Access.

    def front(self):
        """The front value."""
        if not self:
            raise IndexError("front of empty list")
        return self._head._next.value

    def back(self):
        """The back value."""
        if not self:
            raise IndexError("back of empty list")
        return self._tail._prev.value

    def nodes(self):
        """Yield the nodes from front to back."""
        node = self._head._next
        while not node._sentinel:
            nxt = node._next
            yield node
            node = nxt

    def __len__(self):
        return sum(1 for _ in self.nodes())

    def __iter__(self):
        return (node.value for node in self.nodes())

    def __reversed__(self):
        node = self._tail._prev
        while not node._sentinel:
            prv = node._prev
            yield node.value
            node = prv

    def __bool__(self):
        return self._head._next is not self._tail

    # Reordering.

    def reverse(self):
        """Reverse the order of the nodes in place."""
        nodes = list(self.nodes())
        prev = self._head
        for node in reversed(nodes):
            prev._next = node
            node._prev = prev
            prev = node
        prev._next = self._tail
        self._tail._prev = prev

    def _end_of_run(self, a, b, less):
        """Exclusive end of the nondecreasing run starting at A, not past B."""
        while True:
            a = a._next
            if a is b or less(a.value, a._prev.value):
                return a

    def _merge(self, a0, a1b0, b1, less):
        """Merge the sorted runs A0..A1B0 and A1B0..B1 in place."""
        while a0 is not a1b0 and a1b0 is not b1:
            if not less(a1b0.value, a0.value):
                a0 = a0._next
            else:
                a1b0 = a1b0._next
                node = a1b0._prev
                self._unlink(node)
                self._link_before(a0, node)

    def sort(self, less):
        """Sort stably in place with a natural merge sort."""
        while True:
            output_runs = 0
            a0 = self._head._next
            while a0 is not self._tail:
                output_runs += 1
                a1b0 = self._end_of_run(a0, self._tail, less)
                if a1b0 is self._tail:
                    break
                b1 = self._end_of_run(a1b0, self._tail, less)
                self._merge(a0, a1b0, b1, less)
                a0 = b1
            if output_runs <= 1:
                return

    def insert_ordered(self, value, less):
        """Insert VALUE into this sorted list after any equal values.

        Returns the new node.
        """
        position = next(
            (node for node in self.nodes() if less(value, node.value)), None
        )
        return self.insert(position, value)

    def unique(self, less, duplicates=None):
        """Remove all but the first of each run of adjacent equal values.

        Removed nodes are appended to the DList DUPLICATES if it is given.
        """
        if not self:
            return
        elem = self._head._next
        while (nxt := elem._next) is not self._tail:
            if not less(elem.value, nxt.value) and not less(nxt.value, elem.value):
                self._unlink(nxt)
                if duplicates is not None:
                    duplicates._link_before(duplicates._tail, nxt)
            else:
                elem = nxt

    def max(self, less):
        """The largest value; the earliest one if several are largest."""
        if not self:
            raise ValueError("max of empty list")
        best = self._head._next.value
        for value in self:
            if less(best, value):
                best = value
        return best

    def min(self, less):
        """The smallest value; the earliest one if several are smallest."""
        if not self:
            raise ValueError("min of empty list")
        best = self._head._next.value
        for value in self:
            if less(value, best):
                best = value
        return best