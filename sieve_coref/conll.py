"""
CoNLL-2012 style rendering of coreference clusters

Each token line ends in a coreference column: ``(12`` opens a mention of
cluster 12, ``12)`` closes it, ``(12)`` is a one-token mention, several
labels are joined with ``|`` and ``-`` marks a token outside every mention.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping, Optional

from .data.document import Document
from .data.mention import Mention

logger = logging.getLogger(__name__)

_BEGIN = re.compile(r"#begin document \((?P<doc>.*)\);(?: part (?P<part>\d+))?")

Span = tuple[int, int, int]


def _part_number(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0


def render_conll(
    document: Document,
    clusters: Optional[Mapping[int, Iterable[Mention]]] = None,
    include_singletons: bool = True,
) -> str:
    """Render ``clusters`` (default: the document's clusters) as CoNLL lines."""
    if clusters is None:
        clusters = {cid: cluster.mentions for cid, cluster in document.clusters_by_id.items()}
    labels = [[""] * len(sentence) for sentence in document.sentences]

    mentions = []
    for cluster_id, members in clusters.items():
        members = list(members)
        if not include_singletons and len(members) < 2:
            continue
        mentions.extend((m, cluster_id) for m in members)
    mentions.sort(key=lambda pair: (pair[0].sent_num, pair[0].start, -pair[0].end))

    for mention, cluster_id in mentions:
        row = labels[mention.sent_num]
        last = mention.end - 1
        if mention.start == last:
            row[mention.start] = f"|({cluster_id}){row[mention.start]}"
        else:
            row[mention.start] = f"|({cluster_id}{row[mention.start]}"
            row[last] = f"|{cluster_id}){row[last]}"

    doc_id = document.doc_info.get("DOC_ID", document.doc_id)
    part = _part_number(document.doc_info.get("DOC_PART", document.part))
    lines = [f"#begin document ({doc_id}); part {part:03d}"]
    for sentence, row in zip(document.sentences, labels):
        for index, (token, label) in enumerate(zip(sentence, row)):
            lines.append(
                "\t".join(
                    [
                        doc_id,
                        str(part),
                        str(index),
                        token.word,
                        token.pos or "-",
                        token.speaker or "-",
                        label.lstrip("|") or "-",
                    ]
                )
            )
        lines.append("")
    lines.append("#end document")
    return "\n".join(lines) + "\n"


def parse_conll(text: str) -> dict[tuple[str, int], dict[int, set[Span]]]:
    """Read rendered documents back into ``{(doc_id, part): {cluster: spans}}``.

    A span is ``(sentence, start, end)`` with ``end`` exclusive. The
    coreference label is taken from the last column of every token line.
    """
    documents: dict[tuple[str, int], dict[int, set[Span]]] = {}
    clusters: Optional[dict[int, set[Span]]] = None
    stacks: dict[int, list[int]] = {}
    sent_num = 0
    token_index = 0

    for line_number, line in enumerate(text.splitlines(), 1):
        if line.startswith("#begin document"):
            match = _BEGIN.match(line)
            if match is None:
                raise ValueError(f"Malformed document header at line {line_number}: {line!r}")
            key = (match.group("doc"), int(match.group("part") or 0))
            clusters = documents.setdefault(key, {})
            stacks, sent_num, token_index = {}, 0, 0
            continue
        if line.startswith("#end document"):
            _check_closed(stacks, line_number)
            clusters = None
            continue
        if clusters is None or line.startswith("#"):
            continue
        if not line.strip():
            _check_closed(stacks, line_number)
            if token_index:
                sent_num += 1
            token_index = 0
            continue

        label = line.split()[-1]
        for part in label.split("|"):
            if part in ("-", "_"):
                continue
            try:
                cluster_id = int(part.strip("()"))
            except ValueError:
                raise ValueError(f"Cannot parse cluster {part!r} at line {line_number}") from None
            if part.startswith("("):
                stacks.setdefault(cluster_id, []).append(token_index)
            if part.endswith(")"):
                if not stacks.get(cluster_id):
                    raise ValueError(
                        f"No opening bracket for cluster {cluster_id} at line {line_number}"
                    )
                start = stacks[cluster_id].pop()
                clusters.setdefault(cluster_id, set()).add((sent_num, start, token_index + 1))
        token_index += 1

    if not documents:
        raise ValueError("No CoNLL document found")
    return documents


def _check_closed(stacks: dict[int, list[int]], line_number: int) -> None:
    for cluster_id, stack in stacks.items():
        if stack:
            raise ValueError(f"Unclosed mention of cluster {cluster_id} before line {line_number}")
