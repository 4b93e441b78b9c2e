"""
Defines the abstract syntax tree (AST) node structure for the LETTER programming language.

Classes:
    ASTNode:
        A tagged union: every node carries a `kind` from the closed set in
        NODE_FIELDS plus exactly the fields declared for that kind.

Each ASTNode tracks:
    kind (str): The syntactic construct (e.g. "IfStatement", "BinaryExpression").
    fields (dict[str, Any]): The node's fields in declaration order. Values are
        child nodes, lists of child nodes, plain values (names, operators,
        numbers, strings, booleans) or None for an absent optional child.

Usage:
    Nodes are built once by the parser and never mutated afterward. Fields
    are read as attributes (`node.left`, `node.operator`). `to_dict()` gives
    the JSON serialization used by the CLI and the tests.

Example:
    node = ASTNode("BinaryExpression", operator="+", left=a, right=b)
"""

from collections.abc import Iterator
from typing import Any

ASTDict = dict[str, Any]

NODE_FIELDS: dict[str, tuple[str, ...]] = {
    # Program and statements
    "Program": ("body",),
    "ExpressionStatement": ("expression",),
    "EmptyStatement": (),
    "BlockStatement": ("body",),
    "VariableStatement": ("declarations",),
    "VariableDeclaration": ("id", "init"),
    "IfStatement": ("test", "consequent", "alternate"),
    "WhileStatement": ("test", "body"),
    "DoWhileStatement": ("body", "test"),
    "ForStatement": ("init", "test", "update", "body"),
    "FunctionDeclaration": ("name", "params", "body"),
    "ReturnStatement": ("argument",),
    "ClassDeclaration": ("id", "superClass", "body"),
    # Literals and identifiers
    "Identifier": ("name",),
    "NumericLiteral": ("value",),
    "StringLiteral": ("value",),
    "BooleanLiteral": ("value",),
    "NullLiteral": (),
    # Expressions
    "AssignmentExpression": ("operator", "left", "right"),
    "LogicalExpression": ("operator", "left", "right"),
    "BinaryExpression": ("operator", "left", "right"),
    "UnaryExpression": ("operator", "argument"),
    "MemberExpression": ("object", "property", "computed"),
    "CallExpression": ("callee", "arguments"),
    "NewExpression": ("callee", "arguments"),
    "ThisExpression": (),
    "Super": (),
}


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the LETTER language.

    Args:
        kind (str): One of the node kinds in NODE_FIELDS.
        **fields: The fields of that kind, all required, none extra.

    Raises:
        ValueError: If `kind` is not a known node kind.
        TypeError: If fields are missing or unexpected for `kind`.

    Methods:
        __repr__(): Returns a structured string representation for debugging.
        __eq__(other): Checks structural equality with another ASTNode.
        to_dict(): Converts the node (and all descendants) into a nested dictionary.
        walk(): Yields the node and its descendants in pre-order.
    """

    __slots__ = ("kind", "fields")

    kind: str
    fields: dict[str, Any]

    def __init__(self, kind: str, **fields: Any) -> None:
        if kind not in NODE_FIELDS:
            raise ValueError(f"Unknown AST node kind: {kind!r}")
        expected = NODE_FIELDS[kind]
        missing = [name for name in expected if name not in fields]
        extra = [name for name in fields if name not in expected]
        if missing or extra:
            raise TypeError(
                f"{kind} expects fields {expected}, missing={missing}, unexpected={extra}"
            )
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "fields", {name: fields[name] for name in expected})

    def __getattr__(self, name: str) -> Any:
        if name in ("kind", "fields"):
            raise AttributeError(name)
        try:
            return self.fields[name]
        except KeyError:
            raise AttributeError(
                f"{self.kind} node has no field {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.kind} node is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self.kind} node is immutable")

    def __repr__(self) -> str:
        parts = [self.kind]
        for name, value in self.fields.items():
            if isinstance(value, list):
                preview = ", ".join(repr(v) for v in value[:3])
                if len(value) > 3:
                    preview += ", ..."
                parts.append(f"{name}=[{preview}]")
            else:
                parts.append(f"{name}={value!r}")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return self.kind == other.kind and self.fields == other.fields

    __hash__ = None  # type: ignore[assignment]

    def walk(self) -> Iterator["ASTNode"]:
        yield self
        for value in self.fields.values():
            if isinstance(value, ASTNode):
                yield from value.walk()
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, ASTNode):
                        yield from item.walk()

    def to_dict(self) -> ASTDict:
        result: ASTDict = {"type": self.kind}
        for name, value in self.fields.items():
            if isinstance(value, ASTNode):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [v.to_dict() if isinstance(v, ASTNode) else v for v in value]
            result[name] = value
        return result
