import pytest
from hypothesis import given
from hypothesis import strategies as st

from letter.letter_ast import NODE_FIELDS, ASTNode


def ident(name: str) -> ASTNode:
    return ASTNode("Identifier", name=name)


def num(value: int) -> ASTNode:
    return ASTNode("NumericLiteral", value=value)


def test_astnode_fields_are_attributes() -> None:
    node = ASTNode("BinaryExpression", operator="+", left=ident("x"), right=num(1))
    assert node.kind == "BinaryExpression"
    assert node.operator == "+"
    assert node.left == ident("x")
    assert node.right.value == 1


def test_astnode_fields_keep_declaration_order() -> None:
    node = ASTNode("ForStatement", body=ASTNode("EmptyStatement"), update=None, test=None, init=None)
    assert list(node.fields) == ["init", "test", "update", "body"]


def test_astnode_unknown_kind_raises() -> None:
    with pytest.raises(ValueError, match="Unknown AST node kind"):
        ASTNode("TernaryExpression")


def test_astnode_missing_field_raises() -> None:
    with pytest.raises(TypeError, match="missing=\\['right'\\]"):
        ASTNode("BinaryExpression", operator="+", left=num(1))


def test_astnode_unexpected_field_raises() -> None:
    with pytest.raises(TypeError, match="unexpected=\\['value'\\]"):
        ASTNode("NullLiteral", value=None)


def test_astnode_unknown_attribute_raises() -> None:
    with pytest.raises(AttributeError, match="has no field 'name'"):
        _ = num(1).name


def test_astnode_is_immutable() -> None:
    node = ident("x")
    with pytest.raises(AttributeError, match="immutable"):
        node.name = "y"
    with pytest.raises(AttributeError, match="immutable"):
        del node.name
    assert node.name == "x"


def test_astnode_repr() -> None:
    assert repr(ident("x")) == "ASTNode(Identifier, name='x')"
    assert repr(ASTNode("ThisExpression")) == "ASTNode(ThisExpression)"


def test_astnode_repr_truncates_lists() -> None:
    node = ASTNode("Program", body=[ASTNode("EmptyStatement") for _ in range(5)])
    r = repr(node)
    assert r.startswith("ASTNode(Program, body=[ASTNode(EmptyStatement)")
    assert r.endswith(", ...])")


def test_astnode_eq() -> None:
    assert ident("x") == ident("x")
    assert ident("x") != ident("y")
    assert ASTNode("StringLiteral", value="x") != ident("x")
    assert ident("x") != "x"


def test_astnode_is_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(ident("x"))


def test_astnode_to_dict() -> None:
    node = ASTNode(
        "VariableStatement",
        declarations=[
            ASTNode("VariableDeclaration", id=ident("y"), init=None),
        ],
    )
    assert node.to_dict() == {
        "type": "VariableStatement",
        "declarations": [
            {
                "type": "VariableDeclaration",
                "id": {"type": "Identifier", "name": "y"},
                "init": None,
            }
        ],
    }


def test_astnode_to_dict_without_fields() -> None:
    assert ASTNode("NullLiteral").to_dict() == {"type": "NullLiteral"}


def test_astnode_walk_is_preorder() -> None:
    call = ASTNode(
        "CallExpression",
        callee=ident("f"),
        arguments=[num(1), ASTNode("UnaryExpression", operator="-", argument=num(2))],
    )
    assert [n.kind for n in call.walk()] == [
        "CallExpression",
        "Identifier",
        "NumericLiteral",
        "UnaryExpression",
        "NumericLiteral",
    ]


def test_every_kind_can_be_built_from_its_fields() -> None:
    for kind, names in NODE_FIELDS.items():
        node = ASTNode(kind, **{name: None for name in names})
        assert node.to_dict() == {"type": kind, **{name: None for name in names}}


@given(st.text(), st.integers())  # type: ignore[misc]
def test_astnode_eq_same_fields(name: str, value: int) -> None:
    a = ASTNode("MemberExpression", object=ident(name), property=num(value), computed=True)
    b = ASTNode("MemberExpression", object=ident(name), property=num(value), computed=True)
    assert a == b
    assert a.to_dict() == b.to_dict()


@given(st.text(), st.text())  # type: ignore[misc]
def test_astnode_eq_different_names(a: str, b: str) -> None:
    assert (ident(a) == ident(b)) == (a == b)
