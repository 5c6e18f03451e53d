"""Coxeter diagrams as labelled undirected graphs."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .consts import FOUR, ONE, SQRT_2, SQRT_3, SQRT_5, THREE, TWO
from .cox import Cox


def _fmt_float(x: float) -> str:
    if math.isfinite(x) and float(x).is_integer():
        return str(int(x))
    return repr(float(x))


class CdError(Exception):
    """An error while reading or building a Coxeter diagram."""


class MismatchedParenthesisError(CdError):
    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"mismatched parenthesis at position {pos}")


class UnexpectedEndingError(CdError):
    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"CD ended unexpectedly at position {pos}")


class ParseError(CdError):
    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"parsing failed at position {pos}")


class InvalidSymbolError(CdError):
    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"invalid symbol found at position {pos}")


class InvalidEdgeError(CdError):
    def __init__(self, num: int, den: int, pos: int) -> None:
        self.num = num
        self.den = den
        self.pos = pos
        super().__init__(f"invalid edge {num}/{den} at position {pos}")


class RepeatEdgeError(CdError):
    def __init__(self, a: int, b: int) -> None:
        self.a = a
        self.b = b
        super().__init__(f"repeat edge between {a} and {b}")


class NodeKind(Enum):
    """How a mirror interacts with the generator point."""

    UNRINGED = "unringed"
    RINGED = "ringed"
    SNUB = "snub"


_CHAR_VALUES = {
    "v": (SQRT_5 - ONE) / TWO,
    "x": ONE,
    "q": SQRT_2,
    "f": (SQRT_5 + ONE) / TWO,
    "h": SQRT_3,
    "k": math.sqrt(SQRT_2 + TWO),
    "u": TWO,
    "w": SQRT_2 + ONE,
    "F": (SQRT_5 + THREE) / TWO,
    "e": SQRT_3 + ONE,
    "Q": SQRT_2 * TWO,
    "d": THREE,
    "V": SQRT_5 + ONE,
    "U": SQRT_2 + TWO,
    "A": (SQRT_5 + ONE) / FOUR + ONE,
    "X": SQRT_2 * TWO + ONE,
    "B": SQRT_5 + TWO,
}


@dataclass(frozen=True)
class Node:
    """A mirror in a Coxeter diagram, with twice the generator's distance to it."""

    kind: NodeKind
    val: float = 0.0

    @classmethod
    def unringed(cls) -> "Node":
        return cls(NodeKind.UNRINGED, 0.0)

    @classmethod
    def ringed(cls, x: float) -> "Node":
        return cls(NodeKind.RINGED, float(x))

    @classmethod
    def snub(cls, x: float) -> "Node":
        return cls(NodeKind.SNUB, float(x))

    def value(self) -> float:
        """Twice the distance from the generator to this node's mirror."""
        if self.kind is NodeKind.UNRINGED:
            return 0.0
        return self.val

    def is_ringed(self) -> bool:
        return self.kind is NodeKind.RINGED

    @classmethod
    def from_char(cls, c: str) -> Optional["Node"]:
        """Reads a one-character node, or returns None if it isn't one."""
        if c == "o":
            return cls.unringed()
        if c == "s":
            return cls.snub(ONE)
        value = _CHAR_VALUES.get(c)
        return None if value is None else cls.ringed(value)

    @classmethod
    def from_char_or(cls, c: str, pos: int) -> "Node":
        """Reads a one-character node, raising InvalidSymbolError on failure."""
        node = cls.from_char(c)
        if node is None:
            raise InvalidSymbolError(pos)
        return node

    def __str__(self) -> str:
        if self.kind is NodeKind.UNRINGED:
            return "o\n"
        if self.kind is NodeKind.RINGED:
            return f"x({_fmt_float(self.val)})\n"
        return f"s({_fmt_float(self.val)})\n"


@dataclass(frozen=True)
class Edge:
    """An edge of value num/den: an angle of pi * den / num between mirrors."""

    num: int
    den: int

    @classmethod
    def rational(cls, num: int, den: int, pos: int) -> "Edge":
        if num > 1 and den != 0 and den < num:
            return cls(num, den)
        raise InvalidEdgeError(num, den, pos)

    @classmethod
    def int(cls, num: int, pos: int) -> "Edge":
        return cls.rational(num, 1, pos)

    def value(self) -> float:
        return float(self.num) / float(self.den)

    def eq_two(self) -> bool:
        """Whether the edge is equivalent to 2, i.e. perpendicular mirrors."""
        return self.num == self.den * 2

    def __str__(self) -> str:
        if self.den == 1:
            return str(self.num)
        return f"{self.num} / {self.den}"


@dataclass(frozen=True)
class NodeRef:
    """A node position, either absolute or counted back from the last node."""

    negative: bool
    idx: int

    @classmethod
    def new(cls, neg: bool, idx: int) -> "NodeRef":
        return cls(bool(neg), idx)

    def index(self, length: int) -> int:
        """The actual node index, given the number of nodes."""
        if self.negative:
            return length - 1 - self.idx
        return self.idx


@dataclass(frozen=True)
class EdgeRef:
    """References to both ends of an edge, together with its value."""

    first: NodeRef
    other: NodeRef
    edge: Edge

    def indices(self, length: int) -> tuple[int, int]:
        return (self.first.index(length), self.other.index(length))


class Cd:
    """A Coxeter diagram: nodes in order of insertion and edges between them."""

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._edges: list[tuple[int, int, Edge]] = []

    def __repr__(self) -> str:
        return f"Cd(nodes={self._nodes!r}, edges={self._edges!r})"

    def dim(self) -> int:
        """The dimension of the described polytope."""
        return self.node_count()

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def add_node(self, node: Node) -> int:
        """Adds a node and returns its index."""
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _find_edge(self, a: int, b: int) -> Optional[Edge]:
        for x, y, edge in self._edges:
            if (x, y) == (a, b) or (x, y) == (b, a):
                return edge
        return None

    def add_edge(self, a: int, b: int, edge: Edge) -> None:
        """Adds an edge; edges equal to 2 are implicit and skipped."""
        if a >= len(self._nodes) or b >= len(self._nodes) or a < 0 or b < 0:
            raise IndexError("edge refers to a node that doesn't exist")
        if edge.eq_two():
            return
        if self._find_edge(a, b) is not None:
            raise RepeatEdgeError(a, b)
        self._edges.append((a, b, edge))

    def nodes(self) -> list[Node]:
        return list(self._nodes)

    def edges(self) -> list[tuple[int, int, Edge]]:
        return list(self._edges)

    def node_vector(self) -> np.ndarray:
        return np.array([node.value() for node in self._nodes], dtype=float)

    def minimal(self) -> bool:
        """Whether every connected component has a ringed node."""
        adjacency: list[list[int]] = [[] for _ in self._nodes]
        for a, b, _ in self._edges:
            adjacency[a].append(b)
            adjacency[b].append(a)

        seen = [False] * len(self._nodes)
        for start in range(len(self._nodes)):
            if seen[start]:
                continue
            seen[start] = True
            queue = deque([start])
            ringed = False
            while queue:
                node = queue.popleft()
                ringed = ringed or self._nodes[node].is_ringed()
                for nxt in adjacency[node]:
                    if not seen[nxt]:
                        seen[nxt] = True
                        queue.append(nxt)
            if not ringed:
                return False
        return True

    def cox(self) -> Cox:
        """The Coxeter matrix of the diagram."""
        dim = self.dim()
        matrix = np.full((dim, dim), 2.0)
        np.fill_diagonal(matrix, 1.0)
        for a, b, edge in self._edges:
            if a != b:
                matrix[a, b] = matrix[b, a] = edge.value()
        return Cox(matrix)

    def circumradius(self) -> Optional[float]:
        """The norm of the generator point, or None if there is none."""
        generator = self.generator()
        return None if generator is None else float(np.linalg.norm(generator))

    def generator(self) -> Optional[np.ndarray]:
        """The generator point for the mirrors given by Cox.normals, if any."""
        vector = self.node_vector()
        normals = self.cox().normals()
        if normals is None:
            return None

        for i in reversed(range(len(vector))):
            diag = normals[i, i]
            if diag == 0.0:
                return None
            rest = float(normals[i, i + 1 :] @ vector[i + 1 :])
            vector[i] = (vector[i] - rest) / diag
        return vector

    def __str__(self) -> str:
        parts = [f"{self.dim()} Nodes\n", f"{self.edge_count()} Edges\n"]
        parts += [f"Node {i}: {node}" for i, node in enumerate(self._nodes)]
        parts += [f"Edge {i}: {edge}" for i, (_, _, edge) in enumerate(self._edges)]
        return "".join(parts)