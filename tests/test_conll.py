"""Tests for CoNLL coreference columns."""

import pytest

from sieve_coref.conll import parse_conll, render_conll


@pytest.fixture
def wife_document(make_document):
    """"Obama met his wife ." with "his" linked to "Obama"."""
    doc = make_document(
        [{
            "tokens": [
                {"word": "Obama", "pos": "NNP"}, {"word": "met", "pos": "VBD"},
                {"word": "his", "pos": "PRP$"}, {"word": "wife", "pos": "NN"},
                {"word": ".", "pos": "."},
            ],
            "speaker": "Anchor",
        }],
        [
            {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER"},
            {"id": 1, "sentence": 0, "start": 2, "end": 3, "head": 2, "type": "PRONOMINAL"},
            {"id": 2, "sentence": 0, "start": 2, "end": 4, "head": 3},
        ],
        doc_id="wife",
    )
    doc.merge(doc.mentions_by_id[1], doc.mentions_by_id[0])
    return doc


def _columns(text):
    return [line.split("\t") for line in text.splitlines() if line and not line.startswith("#")]


class TestRender:
    """Tests for rendering clusters as bracket columns."""

    def test_header_and_footer(self, wife_document):
        lines = render_conll(wife_document).splitlines()

        assert lines[0] == "#begin document (wife); part 000"
        assert lines[-1] == "#end document"
        assert lines[-2] == ""

    def test_token_columns(self, wife_document):
        rows = _columns(render_conll(wife_document))

        assert len(rows) == 5
        assert rows[0][:6] == ["wife", "0", "0", "Obama", "NNP", "Anchor"]
        assert [row[-1] for row in rows] == ["(0)", "-", "(0)|(2", "2)", "-"]

    def test_singletons_can_be_left_out(self, wife_document):
        rows = _columns(render_conll(wife_document, include_singletons=False))

        assert [row[-1] for row in rows] == ["(0)", "-", "(0)", "-", "-"]

    def test_explicit_clusters(self, wife_document):
        m = wife_document.mentions_by_id
        rows = _columns(render_conll(wife_document, {7: [m[0], m[2]]}))

        assert [row[-1] for row in rows] == ["(7)", "-", "(7", "7)", "-"]


class TestParse:
    """Tests for reading bracket columns back into spans."""

    def test_rendered_clusters_read_back(self, wife_document):
        parsed = parse_conll(render_conll(wife_document))

        assert parsed == {("wife", 0): {0: {(0, 0, 1), (0, 2, 3)}, 2: {(0, 2, 4)}}}

    def test_sentences_counted_by_blank_lines(self):
        text = "\n".join([
            "#begin document (doc); part 001",
            "doc\t1\t0\tHe\tPRP\t-\t(4)",
            "doc\t1\t1\tleft\tVBD\t-\t-",
            "",
            "doc\t1\t0\tThe\tDT\t-\t(4",
            "doc\t1\t1\tman\tNN\t-\t4)",
            "",
            "#end document",
        ])

        assert parse_conll(text) == {("doc", 1): {4: {(0, 0, 1), (1, 0, 2)}}}

    def test_malformed_header(self):
        with pytest.raises(ValueError, match="Malformed document header"):
            parse_conll("#begin document doc\n")

    def test_unclosed_mention(self):
        text = "#begin document (doc); part 000\ndoc\t0\t0\tThe\tDT\t-\t(3\n\n#end document\n"

        with pytest.raises(ValueError, match="Unclosed mention of cluster 3"):
            parse_conll(text)

    def test_closing_without_opening(self):
        text = "#begin document (doc); part 000\ndoc\t0\t0\tman\tNN\t-\t3)\n"

        with pytest.raises(ValueError, match="No opening bracket"):
            parse_conll(text)

    def test_bad_cluster_label(self):
        text = "#begin document (doc); part 000\ndoc\t0\t0\tman\tNN\t-\t(x)\n"

        with pytest.raises(ValueError, match="Cannot parse cluster"):
            parse_conll(text)

    def test_no_document(self):
        with pytest.raises(ValueError, match="No CoNLL document"):
            parse_conll("just text\n")
