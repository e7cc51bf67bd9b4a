"""Ordered (predicate, verdict) rules and the runner that evaluates them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from ..data.cluster import CorefCluster
from ..data.mention import Mention

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries
    from ..data.document import Document
    from ..rules.names import NameMatcher
    from .options import RuleFlags


class Verdict(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    CONTINUE = "continue"


@dataclass
class PairContext:
    """Everything a rule may consult about one candidate pair.

    ``mention`` is the mention being resolved and ``representative`` the
    representative of its cluster; several rules compare the antecedent
    against the representative rather than the mention itself.
    """

    document: "Document"
    mention_cluster: CorefCluster
    antecedent_cluster: CorefCluster
    mention: Mention
    antecedent: Mention
    dictionaries: "Dictionaries"
    flags: "RuleFlags"
    language: str = "en"
    default_pronoun_agreement: bool = False
    name_matcher: Optional["NameMatcher"] = None
    tentative: bool = False
    offending: Optional[tuple[Mention, Mention]] = None
    notes: list[str] = field(default_factory=list)

    @property
    def representative(self) -> Mention:
        return self.mention_cluster.representative or self.mention

    def mark_incompatible(self, m1: Mention, m2: Mention) -> None:
        self.document.add_incompatible(m1, m2)
        self.notes.append(f"incompatible {m1.mention_id}-{m2.mention_id}")


Predicate = Callable[[PairContext], bool]
Effect = Callable[[PairContext], None]


@dataclass(frozen=True)
class Rule:
    """A named predicate and the verdict it yields when it holds."""

    name: str
    predicate: Predicate
    verdict: Verdict
    effect: Optional[Effect] = None

    def fires(self, context: PairContext) -> bool:
        if not self.predicate(context):
            return False
        if self.effect is not None:
            self.effect(context)
        return True


@dataclass
class Decision:
    """Outcome of a rule list: the verdict and which rule produced it."""

    verdict: Verdict
    rule: Optional[str] = None
    notes: list[str] = field(default_factory=list)
    fired: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.verdict is Verdict.ACCEPT

    @property
    def rejected(self) -> bool:
        return self.verdict is Verdict.REJECT

    @property
    def decided(self) -> bool:
        return self.verdict is not Verdict.CONTINUE


def run_rules(rules: Iterable[Rule], context: PairContext) -> Decision:
    """Evaluate rules in order; the first one that holds decides."""
    for rule in rules:
        if rule.fires(context):
            return Decision(rule.verdict, rule.name, context.notes, [rule.name])
    return Decision(Verdict.CONTINUE, notes=context.notes)


def fold_rules(rules: Iterable[Rule], context: PairContext, initial: bool = False) -> Decision:
    """Evaluate every rule; each one that holds overwrites the running verdict.

    Used for tentative matches, which are later confirmed or vetoed.
    """
    state = initial
    last: Optional[str] = None
    fired: list[str] = []
    for rule in rules:
        if rule.fires(context):
            state = rule.verdict is Verdict.ACCEPT
            last = rule.name
            fired.append(rule.name)
    verdict = Verdict.ACCEPT if state else Verdict.CONTINUE
    return Decision(verdict, last if state else None, context.notes, fired)
