"""Tests for the EDN value model."""

import pytest

from edn_py.edn import (
    Char,
    EdnList,
    EdnMap,
    EdnSet,
    EdnVector,
    Keyword,
    Kind,
    Symbol,
    Tagged,
    structural_key,
)


class TestCollectionIdentity:
    """Collections compare by kind and contents."""

    def test_list_is_not_vector(self):
        """Test that kind is part of equality."""
        assert EdnList([1, 2]) != EdnVector([1, 2])
        assert EdnList([1, 2]) == EdnList([1, 2])

    def test_not_equal_to_plain_containers(self):
        """Test that model collections never equal plain Python ones."""
        assert EdnVector([1, 2]) != (1, 2)
        assert EdnSet({1}) != frozenset({1})
        assert EdnMap({"a": 1}) != {"a": 1}

    def test_kinds(self):
        """Test the kind attribute of each collection."""
        assert EdnList().kind is Kind.LIST
        assert EdnVector().kind is Kind.VECTOR
        assert EdnMap().kind is Kind.MAP
        assert EdnSet().kind is Kind.SET

    def test_hashable(self):
        """Test that every collection can be a set member."""
        members = {
            EdnList([1]),
            EdnVector([1]),
            EdnMap({"a": EdnVector([1])}),
            EdnSet([EdnList()]),
            Tagged("t", EdnVector([1])),
        }
        assert len(members) == 5

    def test_map_hash_ignores_order(self):
        """Test that equal maps hash equally regardless of order."""
        assert hash(EdnMap([("a", 1), ("b", 2)])) == hash(EdnMap([("b", 2), ("a", 1)]))


class TestStructuralEquality:
    """Booleans, integers and floats are distinct values in collections."""

    def test_structural_key(self):
        """Test that numbers are paired with their type."""
        assert structural_key(True) != structural_key(1)
        assert structural_key(1) != structural_key(1.0)
        assert structural_key(1) == structural_key(1)
        assert structural_key("a") == "a"

    @pytest.mark.parametrize(
        "left,right",
        [
            (EdnVector([1]), EdnVector([True])),
            (EdnList([0]), EdnList([False])),
            (EdnVector([1]), EdnVector([1.0])),
            (EdnSet([1]), EdnSet([True])),
            (EdnMap({"a": 1}), EdnMap({"a": True})),
            (EdnMap({1: "a"}), EdnMap({True: "a"})),
            (Tagged("t", 1), Tagged("t", True)),
            (Tagged("t", 1), Tagged("t", 1.0)),
        ],
    )
    def test_variants_differ(self, left, right):
        """Test that collections differing only by variant are unequal."""
        assert left != right

    def test_equal_contents(self):
        """Test that same-variant contents still compare equal."""
        assert EdnVector([1, True, 1.5]) == EdnVector([1, True, 1.5])
        assert EdnSet([1, True]) == EdnSet([True, 1])
        assert hash(EdnSet([1, True])) == hash(EdnSet([True, 1]))
        assert Tagged("t", EdnVector([1])) == Tagged("t", EdnVector([1]))

    def test_set_keeps_variants_apart(self):
        """Test that 1, true and 1.0 are three set elements."""
        s = EdnSet([1, True, 1.0])
        assert len(s) == 3
        assert True in s
        assert 0 not in s

    def test_set_keeps_last_inserted(self):
        """Test that an equal later element replaces the earlier one."""
        s = EdnSet(["a", Keyword("a")])
        assert len(s) == 1
        assert isinstance(next(iter(s)), Keyword)

    def test_map_keys_keep_variants_apart(self):
        """Test that 1 and true are separate map keys."""
        m = EdnMap([(1, "int"), (True, "bool"), (1.0, "float")])
        assert len(m) == 3
        assert m[1] == "int"
        assert m[True] == "bool"
        assert m[1.0] == "float"

    def test_map_keeps_last_key(self):
        """Test that a repeated key keeps its slot and takes the later key."""
        m = EdnMap([("a", 1), ("b", 2), (Keyword("a"), 3)])
        assert list(m.items()) == [("a", 3), ("b", 2)]
        assert isinstance(next(iter(m)), Keyword)


class TestEdnMap:
    """Tests for EdnMap behaviour."""

    def test_insertion_order(self):
        """Test that keys keep insertion order."""
        assert list(EdnMap([("z", 1), ("a", 2)])) == ["z", "a"]

    def test_repeated_key(self):
        """Test that a repeated key keeps its slot and takes the later value."""
        m = EdnMap([("a", 1), ("b", 2), ("a", 3)])
        assert list(m.items()) == [("a", 3), ("b", 2)]

    def test_mapping_protocol(self):
        """Test standard mapping access."""
        m = EdnMap({"a": 1})
        assert m["a"] == 1
        assert m.get("missing") is None
        assert "a" in m
        assert len(m) == 1
        with pytest.raises(KeyError):
            m["missing"]


class TestNamedValues:
    """Tests for symbols, keywords and characters."""

    @pytest.mark.parametrize(
        "text,namespace,name",
        [
            ("foo", None, "foo"),
            ("my.ns/bar", "my.ns", "bar"),
            ("/", None, "/"),
        ],
    )
    def test_namespace_and_name(self, text, namespace, name):
        """Test splitting on the namespace separator."""
        for cls in (Symbol, Keyword):
            value = cls(text)
            assert value.namespace == namespace
            assert value.name == name

    def test_text_equality(self):
        """Test that symbols and keywords equal their text."""
        assert Keyword("a") == "a"
        assert Symbol("a") == "a"
        assert hash(Keyword("a")) == hash("a")

    def test_repr(self):
        """Test reprs show the origin."""
        assert repr(Keyword("a")) == "Keyword('a')"
        assert repr(Symbol("a")) == "Symbol('a')"
        assert repr(Char("a")) == "Char('a')"
        assert repr(EdnVector([1])) == "EdnVector([1])"
