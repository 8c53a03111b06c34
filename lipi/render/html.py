"""
Bridge between stored HTML fragments and the render tree.

Sanskrit blocks are stored as small HTML snippets (verses with ``<br>``,
emphasis, footnote spans). They are parsed into trees, transliterated leaf
by leaf, and written back out with the markup unchanged. Comments,
declarations and processing instructions are carried through verbatim.
"""
import html
import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from lipi.render.tree import Leaf, Node, Tree

VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
}

COMMENT = "#comment"
DECLARATION = "#decl"
PROCESSING_INSTRUCTION = "#pi"
MARKED_SECTION = "#marked"


class _Frame:
    def __init__(self, tag: str, attributes: dict):
        self.tag = tag
        self.attributes = attributes
        self.children: List[Tree] = []

    def close(self) -> Node:
        return Node(self.tag, self.attributes, tuple(self.children))


class FragmentParser(HTMLParser):
    """Builds a forest from an HTML fragment; unclosed tags are closed at EOF."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = _Frame("#root", {})
        self.stack: List[_Frame] = [self.root]

    def _append(self, tree: Tree) -> None:
        self.stack[-1].children.append(tree)

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        attributes = {k: ("" if v is None else v) for k, v in attrs}
        if tag in VOID_ELEMENTS:
            self._append(Node(tag, attributes))
            return
        self.stack.append(_Frame(tag, attributes))

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self._append(Node(tag, {k: ("" if v is None else v) for k, v in attrs}))

    def handle_endtag(self, tag: str) -> None:
        if tag in VOID_ELEMENTS:
            return
        # stray end tags are dropped
        if not any(frame.tag == tag for frame in self.stack[1:]):
            return
        while len(self.stack) > 1:
            frame = self.stack.pop()
            self._append(frame.close())
            if frame.tag == tag:
                break

    def handle_data(self, data: str) -> None:
        if data:
            self._append(Leaf(data))

    # Markup with no text content is kept as childless "#" nodes so it
    # survives the round trip and is never handed to the transliterator.
    def handle_comment(self, data: str) -> None:
        self._append(Node(COMMENT, {"text": data}))

    def handle_decl(self, decl: str) -> None:
        self._append(Node(DECLARATION, {"text": decl}))

    def handle_pi(self, data: str) -> None:
        self._append(Node(PROCESSING_INSTRUCTION, {"text": data}))

    def unknown_decl(self, data: str) -> None:
        self._append(Node(MARKED_SECTION, {"text": data}))

    def forest(self) -> List[Tree]:
        while len(self.stack) > 1:
            frame = self.stack.pop()
            self._append(frame.close())
        return list(self.root.children)


def parse_html(fragment: str) -> List[Tree]:
    parser = FragmentParser()
    parser.feed(fragment or "")
    parser.close()
    return parser.forest()


_VERBATIM = {
    COMMENT: "<!--{}-->",
    DECLARATION: "<!{}>",
    PROCESSING_INSTRUCTION: "<?{}>",
    MARKED_SECTION: "<![{}]]>",
}


def render_html(forest: List[Tree]) -> str:
    out: List[str] = []
    # (tree, closing) pairs; a closing entry emits the end tag
    stack = [(tree, False) for tree in reversed(forest)]
    while stack:
        tree, closing = stack.pop()
        if closing:
            out.append(f"</{tree.tag}>")
        elif isinstance(tree, Leaf):
            out.append(html.escape(tree.text, quote=False))
        elif tree.tag in _VERBATIM:
            out.append(_VERBATIM[tree.tag].format(tree.attributes.get("text", "")))
        else:
            attrs = "".join(f' {k}="{html.escape(str(v), quote=True)}"' for k, v in tree.attributes.items())
            out.append(f"<{tree.tag}{attrs}>")
            if tree.tag in VOID_ELEMENTS:
                continue
            stack.append((tree, True))
            stack.extend((child, False) for child in reversed(tree.children))
    return "".join(out)


_WS_RE = re.compile(r"\s+")


def strip_html(fragment: str) -> str:
    """Plain text of a fragment, whitespace collapsed (tooltips, previews)."""
    out: List[str] = []
    stack = list(reversed(parse_html(fragment)))
    while stack:
        tree = stack.pop()
        if isinstance(tree, Leaf):
            out.append(tree.text)
        elif tree.tag == "br":
            out.append(" ")
        elif tree.tag not in _VERBATIM:
            stack.extend(reversed(tree.children))
    return _WS_RE.sub(" ", "".join(out)).strip()
