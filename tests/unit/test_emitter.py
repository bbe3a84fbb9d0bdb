"""
Unit tests for jobdsl_common.emitter.

Tests element nesting, scoped closing and serialization of the document
emitter.
"""

import pytest

from jobdsl_common.emitter import DocumentEmitter
from jobdsl_common.errors import EmitterError


class TestDocumentEmitter:
    """Test suite for DocumentEmitter class."""

    def test_empty_document(self):
        """Test that a fresh emitter serializes to an empty root element."""
        out = DocumentEmitter("project")
        assert out.tostring() == "<project />"

    def test_leaf_booleans_render_lowercase(self):
        """Test that boolean values are written as true/false."""
        out = DocumentEmitter()
        out.leaf("canRoam", True)
        out.leaf("disabled", False)

        root = out.close()
        assert root.find("canRoam").text == "true"
        assert root.find("disabled").text == "false"

    def test_leaf_without_text_is_empty(self):
        """Test that leaves with no text have no content."""
        out = DocumentEmitter()
        out.leaf("actions")

        assert out.close().find("actions").text is None

    def test_leaf_attributes(self):
        """Test that attributes are written on leaves."""
        out = DocumentEmitter()
        out.leaf("scm", attrib={"class": "hudson.scm.NullSCM"})

        assert out.close().find("scm").get("class") == "hudson.scm.NullSCM"

    def test_element_nests_children(self):
        """Test that leaves written inside element() become its children."""
        out = DocumentEmitter()
        with out.element("builders"):
            with out.element("hudson.tasks.Shell"):
                out.leaf("command", "make")
            assert out.depth == 1

        assert out.depth == 0
        root = out.close()
        assert root.find("builders/hudson.tasks.Shell/command").text == "make"

    def test_element_closes_on_exception(self):
        """Test that element() closes its element when the body raises."""
        out = DocumentEmitter()

        with pytest.raises(RuntimeError):
            with out.element("outer"):
                with out.element("inner"):
                    raise RuntimeError("boom")

        assert out.depth == 0
        out.leaf("after")
        assert [child.tag for child in out.close()] == ["outer", "after"]

    def test_element_detects_body_left_open(self):
        """Test that an element left open inside element() is an error."""
        out = DocumentEmitter()

        with pytest.raises(EmitterError, match="Unbalanced"):
            with out.element("outer"):
                out.start("dangling")

        assert out.depth == 0

    def test_element_detects_body_closing_parent(self):
        """Test that closing the scoped element early is an error."""
        out = DocumentEmitter()

        with pytest.raises(EmitterError):
            with out.element("outer"):
                out.end("outer")

    def test_start_end_pair(self):
        """Test explicit start/end nesting."""
        out = DocumentEmitter()
        out.start("a")
        out.leaf("b", "text")
        out.end("a")

        assert out.close().find("a/b").text == "text"

    def test_end_wrong_tag_raises(self):
        """Test that closing an element that is not innermost raises."""
        out = DocumentEmitter()
        out.start("a")
        out.start("b")

        with pytest.raises(EmitterError, match="innermost open element is <b>"):
            out.end("a")

    def test_end_with_nothing_open_raises(self):
        """Test that the root cannot be closed with end()."""
        out = DocumentEmitter()

        with pytest.raises(EmitterError, match="no element is open"):
            out.end("project")

    def test_close_with_open_elements_raises(self):
        """Test that close() refuses to finish a document with open elements."""
        out = DocumentEmitter()
        out.start("a")
        out.start("b")

        with pytest.raises(EmitterError, match="a > b"):
            out.close()

    def test_tostring_indents(self):
        """Test that serialization is indented with two spaces."""
        out = DocumentEmitter()
        with out.element("builders"):
            out.leaf("x", "1")

        assert out.tostring() == (
            "<project>\n  <builders>\n    <x>1</x>\n  </builders>\n</project>"
        )

    @pytest.mark.parametrize("char", ["\x00", "\x01", "\x0b", "\x0c", "\x1f", "\ufffe"])
    def test_leaf_rejects_illegal_xml_characters(self, char):
        """Test that text XML 1.0 cannot represent is refused."""
        out = DocumentEmitter()

        with pytest.raises(EmitterError, match="Illegal XML character"):
            out.leaf("command", f"echo {char}hi")

        assert len(out.close()) == 0

    def test_leaf_allows_tabs_newlines_and_unicode(self):
        """Test that whitespace and non-ASCII text are accepted."""
        out = DocumentEmitter()
        out.leaf("properties", "A=1\n\tB=ü\r\nC=\U0001f680")

        assert out.close().find("properties").text == "A=1\n\tB=ü\r\nC=\U0001f680"

    def test_attribute_rejects_illegal_xml_characters(self):
        """Test that attribute values are checked as well."""
        out = DocumentEmitter()

        with pytest.raises(EmitterError, match="class"):
            out.start("scm", {"class": "bad\x02"})

        assert out.depth == 0
