import pytest

from conftest import FakePrimitive
from lipi.render.tree import Leaf, Node, iter_leaves, map_leaves, transliterate_tree, tree_from_data, tree_to_data
from lipi.services.transliteration import TransliterationEngine
from lipi.state.preferences import TransliterationContext
from lipi.state.storage import InMemoryStorage


def make_context(script="IAST", hydrate=True):
    ctx = TransliterationContext(InMemoryStorage(), TransliterationEngine(FakePrimitive()))
    if hydrate:
        ctx.hydrate()
        ctx.set_target_script(script)
    return ctx


def sample():
    return Node(
        "Wrapper",
        {"a": "A"},
        (Node("InnerWrapper", {"b": "B"}, (Leaf("नमस्ते"), Leaf("World"))),),
    )


def test_structure_is_preserved():
    tree = sample()
    out = transliterate_tree(tree, make_context())
    assert out.tag == "Wrapper"
    assert out.attributes == {"a": "A"}
    inner = out.children[0]
    assert inner.tag == "InnerWrapper"
    assert inner.attributes == {"b": "B"}
    assert len(inner.children) == 2
    assert inner.children[0] == Leaf("[iast]नमस्ते")
    assert inner.children[1] == Leaf("World")
    # input is left alone
    assert tree == sample()


def test_uninitialized_context_leaves_text():
    out = transliterate_tree(sample(), make_context(hydrate=False))
    assert out == sample()


def test_zero_one_many_children():
    ctx = make_context()
    assert transliterate_tree([], ctx) == []
    assert transliterate_tree(Leaf("राम"), ctx) == Leaf("[iast]राम")
    forest = [Leaf("a"), Node("br"), Leaf("राम"), Leaf("b")]
    out = transliterate_tree(forest, ctx)
    assert out == [Leaf("a"), Node("br"), Leaf("[iast]राम"), Leaf("b")]


DEPTH = 5000


def nested(depth, leaf):
    tree = leaf
    for i in range(depth):
        tree = Node("span", {"depth": i}, (tree,))
    return tree


def test_deep_nesting():
    out = transliterate_tree(nested(DEPTH, Leaf("राम")), make_context())
    assert [leaf.text for leaf in iter_leaves(out)] == ["[iast]राम"]
    # walk down without recursion and check every wrapper survived
    node, level = out, DEPTH - 1
    while isinstance(node, Node):
        assert node.tag == "span"
        assert node.attributes == {"depth": level}
        assert len(node.children) == 1
        node, level = node.children[0], level - 1
    assert level == -1
    assert node == Leaf("[iast]राम")


def test_deep_data_conversion():
    data = "धर्म"
    for _ in range(DEPTH):
        data = {"tag": "div", "children": [data]}
    tree = tree_from_data(data)
    assert [leaf.text for leaf in iter_leaves(tree)] == ["धर्म"]
    back = tree_to_data(tree)
    for _ in range(DEPTH):
        assert back["tag"] == "div"
        assert back["attributes"] == {}
        (back,) = back["children"]
    assert back == "धर्म"


def test_iter_leaves_in_document_order():
    forest = [Leaf("a"), Node("p", {}, (Leaf("b"), Node("em", {}, (Leaf("c"),)), Leaf("d"))), Leaf("e")]
    assert [leaf.text for leaf in iter_leaves(forest)] == ["a", "b", "c", "d", "e"]


def test_map_leaves_rejects_foreign_values():
    with pytest.raises(TypeError):
        map_leaves(42, str.upper)


def test_data_conversion():
    data = {"tag": "p", "attributes": {"class": "verse"}, "children": ["धर्म", {"tag": "em", "children": "x"}]}
    tree = tree_from_data(data)
    assert tree == Node("p", {"class": "verse"}, (Leaf("धर्म"), Node("em", {}, (Leaf("x"),))))
    assert tree_to_data(tree) == {
        "tag": "p",
        "attributes": {"class": "verse"},
        "children": ["धर्म", {"tag": "em", "attributes": {}, "children": ["x"]}],
    }


def test_data_conversion_errors():
    with pytest.raises(ValueError):
        tree_from_data({"children": []})
    with pytest.raises(ValueError):
        tree_from_data(3)
    with pytest.raises(ValueError):
        tree_from_data({"tag": "p", "attributes": ["x"]})


def test_empty_string_children_is_one_empty_leaf():
    assert tree_from_data({"tag": "p", "children": ""}) == Node("p", {}, (Leaf(""),))
    assert tree_from_data({"tag": "p", "children": ["", "x"]}) == Node("p", {}, (Leaf(""), Leaf("x")))
    assert tree_from_data({"tag": "p", "children": None}) == Node("p")
    assert tree_from_data({"tag": "p", "children": []}) == Node("p")
    with pytest.raises(ValueError):
        tree_from_data({"tag": "p", "children": 5})
