"""
Document emitter for Jenkins job configuration XML.

The emitter keeps a cursor (the innermost open element) over an ElementTree
document. Capability providers append subtrees at the cursor using the
scoped ``element()`` context manager, which guarantees every element they
open is closed again even if the body raises.
"""

import re
import xml.etree.ElementTree as XML
from collections.abc import Iterator
from contextlib import contextmanager

from .errors import EmitterError

# Characters outside the XML 1.0 Char production; ElementTree writes them as-is
_ILLEGAL_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _check_text(where: str, text: str) -> str:
    """Reject text that would make the document not well-formed."""
    match = _ILLEGAL_XML_CHARS.search(text)
    if match:
        raise EmitterError(
            f"Illegal XML character {match.group()!r} at position "
            f"{match.start()} in {where}"
        )
    return text


def _check_attrib(tag: str, attrib: dict[str, str] | None) -> dict[str, str]:
    attrib = attrib or {}
    for key, value in attrib.items():
        _check_text(f"<{tag} {key}=...>", value)
    return attrib


def _to_text(value: object) -> str:
    """Convert a field value to its document text (booleans as true/false)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DocumentEmitter:
    """
    Builds one XML document through a stack of open elements.

    The root element is open for the lifetime of the emitter; ``close()``
    verifies that nothing else is left open.
    """

    def __init__(self, root_tag: str = "project"):
        self.root = XML.Element(root_tag)
        self._stack: list[XML.Element] = [self.root]

    @property
    def current(self) -> XML.Element:
        """The element new children are appended to."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        """Number of open elements below the root."""
        return len(self._stack) - 1

    def start(self, tag: str, attrib: dict[str, str] | None = None) -> XML.Element:
        """Open a child element of the cursor and move the cursor into it."""
        child = XML.SubElement(self.current, tag, _check_attrib(tag, attrib))
        self._stack.append(child)
        return child

    def end(self, tag: str) -> None:
        """
        Close the innermost open element.

        Raises:
            EmitterError: If ``tag`` is not the innermost open element
        """
        if self.depth == 0:
            raise EmitterError(f"Cannot close <{tag}>: no element is open")
        if self.current.tag != tag:
            raise EmitterError(
                f"Cannot close <{tag}>: innermost open element is <{self.current.tag}>"
            )
        self._stack.pop()

    @contextmanager
    def element(
        self, tag: str, attrib: dict[str, str] | None = None
    ) -> Iterator[XML.Element]:
        """Open ``tag`` for the duration of the with-block, always closing it."""
        depth = len(self._stack)
        child = self.start(tag, attrib)
        try:
            yield child
        except BaseException:
            del self._stack[depth:]
            raise
        balanced = len(self._stack) == depth + 1 and self.current is child
        del self._stack[depth:]
        if not balanced:
            raise EmitterError(f"Unbalanced nesting inside <{tag}>")

    def leaf(
        self,
        tag: str,
        text: object = None,
        attrib: dict[str, str] | None = None,
    ) -> XML.Element:
        """
        Append a closed child element, optionally with text.

        Raises:
            EmitterError: If the text or an attribute value contains a
                          character that XML 1.0 does not allow
        """
        attrib = _check_attrib(tag, attrib)
        if text is not None:
            text = _check_text(f"<{tag}>", _to_text(text))
        child = XML.SubElement(self.current, tag, attrib)
        child.text = text
        return child

    def close(self) -> XML.Element:
        """
        Finish the document and return its root.

        Raises:
            EmitterError: If any element below the root is still open
        """
        if self.depth != 0:
            unclosed = " > ".join(e.tag for e in self._stack[1:])
            raise EmitterError(f"Unclosed element(s): {unclosed}")
        return self.root

    def tostring(self) -> str:
        """Serialize the closed document as indented unicode XML."""
        root = self.close()
        XML.indent(root, space="  ")
        return XML.tostring(root, encoding="unicode")
