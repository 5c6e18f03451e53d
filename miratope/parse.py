"""Parsing of Coxeter diagrams written in inline ASCII notation.

A diagram is a sequence of nodes, optionally separated by edges:

* one-character nodes such as ``x`` or ``F``;
* parenthesized lengths such as ``(1.0)`` or ``(-3.5)``;
* virtual nodes such as ``*a`` or ``*-c``, referring to earlier nodes
  (counted from the end of the diagram when negated);
* edges, either integers like ``3`` or fractions like ``5/2``.

Whitespace may separate tokens. Error positions are character offsets.
"""

from __future__ import annotations

import math
import re
from collections import deque
from typing import Optional

from .cd import (
    Cd,
    Edge,
    EdgeRef,
    InvalidSymbolError,
    MismatchedParenthesisError,
    Node,
    NodeRef,
    ParseError,
    UnexpectedEndingError,
)
from .cox import Cox
from .gen_iter import GenIter

_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_U32_MAX = 2**32 - 1


class CdBuilder:
    """Reads a Coxeter diagram from its inline notation.

    Nodes end up in the diagram in the order in which they were read. Edges
    are queued and only added once every node is known, since virtual nodes
    may refer to positions counted from the end.
    """

    def __init__(self, diagram: str) -> None:
        self.diagram = diagram
        self._reset()

    def _reset(self) -> None:
        self._chars = list(enumerate(self.diagram))
        self._pos = 0
        self._cd = Cd()
        self._edge_queue: deque[EdgeRef] = deque()
        self._prev_node: Optional[NodeRef] = None
        self._next_edge: Optional[Edge] = None

    # Low-level character access.

    def _unexpected_ending(self) -> UnexpectedEndingError:
        return UnexpectedEndingError(len(self.diagram))

    def _peek(self) -> Optional[tuple[int, str]]:
        if self._pos < len(self._chars):
            return self._chars[self._pos]
        return None

    def _next(self) -> Optional[tuple[int, str]]:
        item = self._peek()
        if item is not None:
            self._pos += 1
        return item

    def _peek_or(self) -> tuple[int, str]:
        item = self._peek()
        if item is None:
            raise self._unexpected_ending()
        return item

    def _next_or(self) -> tuple[int, str]:
        item = self._next()
        if item is None:
            raise self._unexpected_ending()
        return item

    def _skip_whitespace(self) -> None:
        while (item := self._peek()) is not None and item[1].isspace():
            self._next()

    # Number parsing.

    def _parse_float(self, init_idx: int, end_idx: int) -> float:
        text = self.diagram[init_idx : end_idx + 1]
        if not _FLOAT.fullmatch(text):
            raise ParseError(end_idx)
        return float(text)

    def _parse_u32(self, init_idx: int, end_idx: int) -> int:
        text = self.diagram[init_idx : end_idx + 1]
        if not text or not all("0" <= c <= "9" for c in text):
            raise ParseError(end_idx)
        value = int(text)
        if value > _U32_MAX:
            raise ParseError(end_idx)
        return value

    # Tokens.

    def _parse_node(self) -> Node:
        """Reads a parenthesized length; the opening parenthesis is already consumed."""
        first = self._peek()
        if first is None:
            raise MismatchedParenthesisError(len(self.diagram))
        init_idx = first[0]
        end_idx = init_idx

        while (item := self._next()) is not None:
            idx, c = item
            if c == ")":
                val = self._parse_float(init_idx, end_idx)
                if math.isnan(val):
                    raise InvalidSymbolError(end_idx)
                return Node.ringed(val)
            end_idx = idx

        raise MismatchedParenthesisError(len(self.diagram))

    def _create_node(self) -> None:
        self._skip_whitespace()
        idx, c = self._next_or()
        new_node = NodeRef.new(False, self._cd.node_count())

        if c == "(":
            self._cd.add_node(self._parse_node())
        elif c == "*":
            idx, c = self._next_or()
            neg = c == "-"
            if neg:
                idx, c = self._next_or()
            if "a" <= c <= "z":
                new_node = NodeRef.new(neg, ord(c) - ord("a"))
            else:
                raise InvalidSymbolError(idx)
        else:
            self._cd.add_node(Node.from_char_or(c, idx))

        if self._prev_node is not None:
            if self._next_edge is not None:
                self._edge_queue.append(
                    EdgeRef(self._prev_node, new_node, self._next_edge)
                )
            self._next_edge = None

        self._prev_node = new_node

    def _parse_edge(self) -> Optional[Edge]:
        """Reads an edge, or returns None if the next token isn't one."""
        init_idx, c = self._peek_or()
        if not "0" <= c <= "9":
            return None

        numerator: Optional[int] = None
        end_idx = init_idx

        while True:
            idx, c = self._peek_or()
            if c == "/":
                numerator = self._parse_u32(init_idx, end_idx)
                init_idx = idx + 1
            elif c in "(* " or "A" <= c <= "z":
                last = self._parse_u32(init_idx, end_idx)
                if numerator is None:
                    return Edge.int(last, end_idx)
                return Edge.rational(numerator, last, end_idx)
            elif not "0" <= c <= "9":
                raise InvalidSymbolError(idx)

            end_idx = idx
            self._next()

    def _create_edge(self) -> None:
        self._skip_whitespace()
        self._next_edge = self._parse_edge()

    def _read(self) -> None:
        while True:
            self._create_node()
            if self._peek() is None:
                return
            self._create_edge()

    def build(self) -> Cd:
        """Reads the whole diagram and returns it, raising a CdError on failure."""
        self._reset()
        self._read()
        length = self._cd.node_count()

        for edge_ref in self._edge_queue:
            a, b = edge_ref.indices(length)
            self._cd.add_edge(a, b, edge_ref.edge)

        cd = self._cd
        self._reset()
        return cd


def parse_cd(text: str) -> Cd:
    """Parses a Coxeter diagram from inline notation."""
    return CdBuilder(text).build()


def parse_cox(text: str) -> Cox:
    """Parses a Coxeter diagram and returns its Coxeter matrix."""
    return parse_cd(text).cox()


def parse_gen_iter(text: str) -> Optional[GenIter]:
    """Parses a diagram into an iterator over its reflection group.

    Returns None if the group isn't spherical.
    """
    return parse_cox(text).gen_iter()