"""Tokens and constituency trees handed over by the annotation stack."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class Token:
    """One annotated token of a sentence."""

    word: str
    lemma: str = ""
    pos: str = ""
    ner: str = "O"
    speaker: Optional[str] = None
    utterance: int = 0
    index: int = 0

    @property
    def lower(self) -> str:
        return self.word.lower()


# Labels whose subtrees bound the clause-nesting walk over candidates
_CLAUSE_ROOT_LABELS = frozenset({"TOP", "ROOT"})

_TREE_TOKEN = re.compile(r"\(|\)|[^\s()]+")


@dataclass(eq=False)
class ParseNode:
    """Constituent of a sentence parse.

    Leaves carry the index of the token they cover; inner nodes cover the
    half-open token span ``[start, end)`` of their leaves.
    """

    label: str
    children: list["ParseNode"] = field(default_factory=list)
    parent: Optional["ParseNode"] = field(default=None, repr=False)
    start: int = 0
    end: int = 0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_preterminal(self) -> bool:
        return len(self.children) == 1 and self.children[0].is_leaf

    def is_clause_level(self) -> bool:
        """True for nodes that bound a clause or noun phrase."""
        return (
            self.label in _CLAUSE_ROOT_LABELS
            or self.label.startswith("S")
            or self.label == "NP"
        )

    def ancestors(self) -> Iterator["ParseNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def root(self) -> "ParseNode":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def dominates(self, other: Optional["ParseNode"]) -> bool:
        """True if ``other`` is this node or lies below it."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def leaves(self) -> Iterator["ParseNode"]:
        if self.is_leaf:
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def preterminals(self) -> Iterator["ParseNode"]:
        if self.is_preterminal:
            yield self
            return
        for child in self.children:
            yield from child.preterminals()

    def preterminal_at(self, index: int) -> Optional["ParseNode"]:
        for node in self.preterminals():
            if node.start == index:
                return node
        return None

    def find_constituent(self, start: int, end: int) -> Optional["ParseNode"]:
        """Highest node covering exactly ``[start, end)``, else the lowest cover."""
        if not (self.start <= start and end <= self.end):
            return None
        if self.start == start and self.end == end and not self.is_leaf:
            return self
        for child in self.children:
            found = child.find_constituent(start, end)
            if found is not None:
                return found
        return None if self.is_leaf else self

    @classmethod
    def from_bracketed(cls, text: str) -> "ParseNode":
        """Read a Penn-style bracketed tree such as ``(ROOT (S (NP (NNP Obama))))``."""
        tokens = _TREE_TOKEN.findall(text)
        if not tokens:
            raise ValueError("Empty parse tree")
        position = 0
        leaf_index = 0

        def parse() -> ParseNode:
            nonlocal position, leaf_index
            if tokens[position] != "(":
                leaf = cls(label=tokens[position], start=leaf_index, end=leaf_index + 1)
                leaf_index += 1
                position += 1
                return leaf
            position += 1
            label = ""
            if tokens[position] not in ("(", ")"):
                label = tokens[position]
                position += 1
            node = cls(label=label or "ROOT", start=leaf_index)
            while tokens[position] != ")":
                child = parse()
                child.parent = node
                node.children.append(child)
            position += 1
            node.end = leaf_index
            return node

        try:
            tree = parse()
        except IndexError as e:
            raise ValueError(f"Unbalanced parse tree: {text!r}") from e
        return tree

    def path_to(self, ancestor: "ParseNode") -> list[str]:
        """Labels from this node up to and including ``ancestor``."""
        labels = [self.label]
        for node in self.ancestors():
            labels.append(node.label)
            if node is ancestor:
                break
        return labels
