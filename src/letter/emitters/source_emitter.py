"""
Prints LETTER ASTs back to LETTER source text.

This module defines the `SourceEmitter` class, which walks a `Program` node and
emits normalized source: one statement per line, four-space indentation, and
every compound sub-expression wrapped in parentheses. The output re-parses to
a structurally identical tree, which is what the CLI's `--pretty` mode and the
round-trip tests rely on.

Behavior:
    - Statements are dispatched to `emit_<snake_case_kind>` methods that append
      lines to a buffer (`lines`), retrieved with `get_output()`.
    - Expressions are rendered to strings by `emit_expr()`, dispatching to
      `emit_expr_<snake_case_kind>` methods.

Raises:
    - `NotImplementedError`: If a node kind has no emitter method.
    - `ValueError`: If a string value contains both quote characters.
"""

import re

from letter.letter_ast import ASTNode

_COMPOUND_EXPRESSIONS = frozenset(
    {
        "AssignmentExpression",
        "LogicalExpression",
        "BinaryExpression",
        "UnaryExpression",
    }
)


def snake_case(kind: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", kind).lower()


class SourceEmitter:
    """Emits LETTER source code from LETTER AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted code.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def _visit(self, node: ASTNode) -> None:
        method_name = f"emit_{snake_case(node.kind)}"
        if not hasattr(self, method_name):
            raise NotImplementedError(f"No emitter method for node kind '{node.kind}'")
        getattr(self, method_name)(node)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def emit_program(self, node: ASTNode) -> None:
        for stmt in node.body:
            self._visit(stmt)

    def emit_expression_statement(self, node: ASTNode) -> None:
        self.emit_line(f"{self.emit_expr(node.expression)};")

    def emit_empty_statement(self, node: ASTNode) -> None:
        self.emit_line(";")

    def emit_block_statement(self, node: ASTNode) -> None:
        self.emit_block(node, "")

    def emit_block(self, node: ASTNode, header: str, trailer: str = "") -> None:
        """Emit `header {`, the indented body, then `}trailer`."""
        if not node.body:
            self.emit_line(f"{header}{{}}{trailer}")
            return
        self.emit_line(f"{header}{{")
        self.indent += 1
        for stmt in node.body:
            self._visit(stmt)
        self.indent -= 1
        self.emit_line(f"}}{trailer}")

    def emit_body(self, node: ASTNode, header: str, trailer: str = "") -> None:
        """Emit a statement that follows a header such as `while (x) `."""
        if node.kind == "BlockStatement":
            self.emit_block(node, header, trailer)
            return
        self.emit_line(header.rstrip())
        self.indent += 1
        self._visit(node)
        self.indent -= 1
        if trailer:
            self.emit_line(trailer.strip())

    def emit_variable_statement(self, node: ASTNode) -> None:
        self.emit_line(f"{self.variable_declarations(node)};")

    def variable_declarations(self, node: ASTNode) -> str:
        parts = []
        for decl in node.declarations:
            name = decl.id.name
            if decl.init is None:
                parts.append(name)
            else:
                parts.append(f"{name} = {self.emit_expr(decl.init)}")
        return "let " + ", ".join(parts)

    def emit_if_statement(self, node: ASTNode) -> None:
        self.emit_body(node.consequent, f"if ({self.emit_expr(node.test)}) ")
        if node.alternate is not None:
            self.emit_body(node.alternate, "else ")

    def emit_while_statement(self, node: ASTNode) -> None:
        self.emit_body(node.body, f"while ({self.emit_expr(node.test)}) ")

    def emit_do_while_statement(self, node: ASTNode) -> None:
        trailer = f" while ({self.emit_expr(node.test)});"
        self.emit_body(node.body, "do ", trailer)

    def emit_for_statement(self, node: ASTNode) -> None:
        if node.init is None:
            init = ""
        elif node.init.kind == "VariableStatement":
            init = self.variable_declarations(node.init)
        else:
            init = self.emit_expr(node.init)
        test = "" if node.test is None else f" {self.emit_expr(node.test)}"
        update = "" if node.update is None else f" {self.emit_expr(node.update)}"
        self.emit_body(node.body, f"for ({init};{test};{update}) ")

    def emit_function_declaration(self, node: ASTNode) -> None:
        params = ", ".join(p.name for p in node.params)
        self.emit_block(node.body, f"def {node.name.name}({params}) ")

    def emit_return_statement(self, node: ASTNode) -> None:
        if node.argument is None:
            self.emit_line("return;")
        else:
            self.emit_line(f"return {self.emit_expr(node.argument)};")

    def emit_class_declaration(self, node: ASTNode) -> None:
        header = f"class {node.id.name} "
        if node.superClass is not None:
            header += f"extends {node.superClass.name} "
        self.emit_block(node.body, header)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def emit_expr(self, node: ASTNode) -> str:
        method_name = f"emit_expr_{snake_case(node.kind)}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No expression emitter for node kind '{node.kind}'"
            )
        result: str = getattr(self, method_name)(node)
        return result

    def emit_operand(self, node: ASTNode) -> str:
        """Render a sub-expression, parenthesized when it is compound."""
        text = self.emit_expr(node)
        if node.kind in _COMPOUND_EXPRESSIONS:
            return f"({text})"
        return text

    def emit_expr_identifier(self, node: ASTNode) -> str:
        return str(node.name)

    def emit_expr_numeric_literal(self, node: ASTNode) -> str:
        return str(node.value)

    def emit_expr_string_literal(self, node: ASTNode) -> str:
        value = str(node.value)
        if '"' not in value:
            return f'"{value}"'
        if "'" not in value:
            return f"'{value}'"
        raise ValueError(f"String cannot be quoted: {value!r}")

    def emit_expr_boolean_literal(self, node: ASTNode) -> str:
        return "true" if node.value else "false"

    def emit_expr_null_literal(self, node: ASTNode) -> str:
        return "null"

    def emit_expr_this_expression(self, node: ASTNode) -> str:
        return "this"

    def emit_expr_super(self, node: ASTNode) -> str:
        return "super"

    def emit_expr_assignment_expression(self, node: ASTNode) -> str:
        left = self.emit_expr(node.left)
        right = self.emit_operand(node.right)
        return f"{left} {node.operator} {right}"

    def emit_expr_binary_expression(self, node: ASTNode) -> str:
        left = self.emit_operand(node.left)
        right = self.emit_operand(node.right)
        return f"{left} {node.operator} {right}"

    emit_expr_logical_expression = emit_expr_binary_expression

    def emit_expr_unary_expression(self, node: ASTNode) -> str:
        return f"{node.operator}{self.emit_operand(node.argument)}"

    def emit_expr_member_expression(self, node: ASTNode) -> str:
        obj = self.emit_operand(node.object)
        if node.object.kind == "CallExpression":
            # calls only chain with further calls; member access needs parens
            obj = f"({obj})"
        if node.computed:
            return f"{obj}[{self.emit_expr(node.property)}]"
        return f"{obj}.{node.property.name}"

    def emit_expr_call_expression(self, node: ASTNode) -> str:
        callee = self.emit_operand(node.callee)
        return f"{callee}({self.emit_arguments(node.arguments)})"

    def emit_expr_new_expression(self, node: ASTNode) -> str:
        callee = self.emit_expr(node.callee)
        if node.callee.kind not in ("Identifier", "MemberExpression", "ThisExpression"):
            callee = f"({callee})"
        return f"new {callee}({self.emit_arguments(node.arguments)})"

    def emit_arguments(self, arguments: list[ASTNode]) -> str:
        return ", ".join(self.emit_expr(arg) for arg in arguments)


def to_source(program: ASTNode) -> str:
    """Render a `Program` node as normalized LETTER source."""
    emitter = SourceEmitter()
    emitter._visit(program)
    return emitter.get_output()
