"""
LETTER Language Parser

Parses LETTER source text into a structured abstract syntax tree (AST).

This module implements a recursive-descent LL(1) parser: one method per grammar
production, a single token of lookahead pulled lazily from the `Lexer`, and
every token consumed through `eat()`. Left-recursive rules (`X : X op Y`) are
folded into loops so binary operators come out left-associative; assignment
recurses on itself and comes out right-associative.

Supported Constructs
--------------------
- Statements:
    * Expression, empty (`;`) and block (`{ ... }`) statements
    * Variables: `let a = 1, b;`
    * Control flow: `if`/`else`, `while`, `do ... while`, `for (init; test; update)`
    * Functions: `def name(a, b) { ... }` and `return`
    * Classes: `class Name extends Base { ... }`

- Expressions, lowest to highest precedence:
    * Assignment: `=`, `+=`, `-=`, `*=`, `/=` (right-associative)
    * Logical: `||`, then `&&`
    * Equality: `==`, `!=`
    * Relational: `<`, `<=`, `>`, `>=`
    * Additive: `+`, `-`
    * Multiplicative: `*`, `/`
    * Unary: `+x`, `-x`, `!x`
    * Member access and calls: `a.b`, `a[b]`, `f(x)`, `f()()`, `super(x)`, `new A(x)`
    * Primary: literals, identifiers, `this`, parenthesized expressions

Parser Behavior
---------------
- Fail-fast: the first malformed construct raises `SyntaxError` and nothing is
  returned; there is no recovery or resynchronization.
- `parse()` re-initializes the lexer and lookahead, so an instance may be
  reused for several programs (one at a time).

Raises
------
SyntaxError
    On an unexpected token, an unexpected end of input, or an invalid
    assignment target.
ScanError
    Propagated from the lexer on malformed input text.
"""

from __future__ import annotations

from collections.abc import Callable

from letter.letter_ast import ASTNode
from letter.letter_constants import (
    ASSIGNMENT_TOKENS,
    EOF,
    LITERAL_TOKENS,
    UNARY_TOKENS,
)
from letter.letter_lexer import Lexer, Token

VALID_ASSIGNMENT_TARGETS = ("Identifier", "MemberExpression")


class Parser:
    """
    LETTER Parser Class

    Attributes
    ----------
    lexer : Lexer
        Source of tokens; re-initialized on each `parse()` call.
    lookahead : Token
        The current, not yet consumed, token.

    Methods
    -------
    parse(source) -> ASTNode
        Parse a complete program into a `Program` node.
    eat(token_type) -> Token
        Consume the lookahead if it has the expected type.
    """

    def __init__(self) -> None:
        self.lexer = Lexer()
        self.lookahead: Token = Token(EOF, EOF)

    def parse(self, source: str) -> ASTNode:
        """Parse a full LETTER program and return its `Program` node."""
        self.lexer.init(source)
        self.lookahead = self.lexer.next_token()
        return self.parse_program()

    def eat(self, token_type: str) -> Token:
        """Consume the lookahead token, which must be of `token_type`."""
        token = self.lookahead
        if token.type == EOF:
            raise SyntaxError(
                f'Unexpected end of input, expected: "{token_type}"'
            )
        if token.type != token_type:
            raise SyntaxError(
                f'Unexpected token: "{token.value}", expected: "{token_type}" '
                f"(line {token.line}, col {token.col})"
            )
        self.lookahead = self.lexer.next_token()
        return token

    def _at(self, *token_types: str) -> bool:
        return self.lookahead.type in token_types

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> ASTNode:
        """
        Program
          : StatementList
          ;
        """
        return ASTNode("Program", body=self.parse_statement_list())

    def parse_statement_list(self, stop_token: str = EOF) -> list[ASTNode]:
        """
        StatementList
          : Statement
          | StatementList Statement -> Statement Statement Statement ...
          ;
        """
        statements: list[ASTNode] = []
        while not self._at(stop_token, EOF):
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self) -> ASTNode:
        """Dispatch on the lookahead to the matching statement production."""
        token_type = self.lookahead.type
        if token_type == ";":
            return self.parse_empty_statement()
        if token_type == "{":
            return self.parse_block_statement()
        if token_type == "let":
            return self.parse_variable_statement()
        if token_type == "if":
            return self.parse_if_statement()
        if token_type in ("while", "do", "for"):
            return self.parse_iteration_statement()
        if token_type == "def":
            return self.parse_function_declaration()
        if token_type == "class":
            return self.parse_class_declaration()
        if token_type == "return":
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_empty_statement(self) -> ASTNode:
        self.eat(";")
        return ASTNode("EmptyStatement")

    def parse_block_statement(self) -> ASTNode:
        """
        BlockStatement
          : '{' OptStatementList '}'
          ;
        """
        self.eat("{")
        body = self.parse_statement_list("}")
        self.eat("}")
        return ASTNode("BlockStatement", body=body)

    def parse_variable_statement(self) -> ASTNode:
        """
        VariableStatement
          : 'let' VariableDeclarationList ';'
          ;
        """
        statement = self.parse_variable_statement_init()
        self.eat(";")
        return statement

    def parse_variable_statement_init(self) -> ASTNode:
        """`let` declarations without the trailing `;` (for-loop initializer)."""
        self.eat("let")
        declarations = self.parse_variable_declaration_list()
        return ASTNode("VariableStatement", declarations=declarations)

    def parse_variable_declaration_list(self) -> list[ASTNode]:
        declarations = [self.parse_variable_declaration()]
        while self._at(","):
            self.eat(",")
            declarations.append(self.parse_variable_declaration())
        return declarations

    def parse_variable_declaration(self) -> ASTNode:
        """
        VariableDeclaration
          : Identifier OptVariableInitializer
          ;
        """
        id_ = self.parse_identifier()
        init = None
        if not self._at(";", ","):
            init = self.parse_variable_initializer()
        return ASTNode("VariableDeclaration", id=id_, init=init)

    def parse_variable_initializer(self) -> ASTNode:
        self.eat("SIMPLE_ASSIGN")
        return self.parse_assignment_expression()

    def parse_if_statement(self) -> ASTNode:
        """
        IfStatement
          : 'if' '(' Expression ')' Statement
          | 'if' '(' Expression ')' Statement 'else' Statement
          ;

        An `else` always binds to the nearest `if`: it is consumed greedily
        right after the consequent.
        """
        self.eat("if")
        self.eat("(")
        test = self.parse_expression()
        self.eat(")")
        consequent = self.parse_statement()

        alternate = None
        if self._at("else"):
            self.eat("else")
            alternate = self.parse_statement()

        return ASTNode(
            "IfStatement", test=test, consequent=consequent, alternate=alternate
        )

    def parse_iteration_statement(self) -> ASTNode:
        if self._at("while"):
            return self.parse_while_statement()
        if self._at("do"):
            return self.parse_do_while_statement()
        return self.parse_for_statement()

    def parse_while_statement(self) -> ASTNode:
        self.eat("while")
        self.eat("(")
        test = self.parse_expression()
        self.eat(")")
        body = self.parse_statement()
        return ASTNode("WhileStatement", test=test, body=body)

    def parse_do_while_statement(self) -> ASTNode:
        self.eat("do")
        body = self.parse_statement()
        self.eat("while")
        self.eat("(")
        test = self.parse_expression()
        self.eat(")")
        self.eat(";")
        return ASTNode("DoWhileStatement", body=body, test=test)

    def parse_for_statement(self) -> ASTNode:
        """
        ForStatement
          : 'for' '(' OptForStatementInit ';' OptExpression ';' OptExpression ')' Statement
          ;
        """
        self.eat("for")
        self.eat("(")

        init = None if self._at(";") else self.parse_for_statement_init()
        self.eat(";")

        test = None if self._at(";") else self.parse_expression()
        self.eat(";")

        update = None if self._at(")") else self.parse_expression()
        self.eat(")")

        body = self.parse_statement()
        return ASTNode("ForStatement", init=init, test=test, update=update, body=body)

    def parse_for_statement_init(self) -> ASTNode:
        if self._at("let"):
            return self.parse_variable_statement_init()
        return self.parse_expression()

    def parse_function_declaration(self) -> ASTNode:
        """
        FunctionDeclaration
          : 'def' Identifier '(' OptFormalParameterList ')' BlockStatement
          ;
        """
        self.eat("def")
        name = self.parse_identifier()
        self.eat("(")
        params = [] if self._at(")") else self.parse_formal_parameter_list()
        self.eat(")")
        body = self.parse_block_statement()
        return ASTNode("FunctionDeclaration", name=name, params=params, body=body)

    def parse_formal_parameter_list(self) -> list[ASTNode]:
        params = [self.parse_identifier()]
        while self._at(","):
            self.eat(",")
            params.append(self.parse_identifier())
        return params

    def parse_return_statement(self) -> ASTNode:
        self.eat("return")
        argument = None if self._at(";") else self.parse_expression()
        self.eat(";")
        return ASTNode("ReturnStatement", argument=argument)

    def parse_class_declaration(self) -> ASTNode:
        """
        ClassDeclaration
          : 'class' Identifier OptClassExtends BlockStatement
          ;
        """
        self.eat("class")
        id_ = self.parse_identifier()
        super_class = self.parse_class_extends() if self._at("extends") else None
        body = self.parse_block_statement()
        return ASTNode("ClassDeclaration", id=id_, superClass=super_class, body=body)

    def parse_class_extends(self) -> ASTNode:
        self.eat("extends")
        return self.parse_identifier()

    def parse_expression_statement(self) -> ASTNode:
        expression = self.parse_expression()
        self.eat(";")
        return ASTNode("ExpressionStatement", expression=expression)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> ASTNode:
        return self.parse_assignment_expression()

    def parse_assignment_expression(self) -> ASTNode:
        """
        AssignmentExpression
          : LogicalORExpression
          | LeftHandSideExpression AssignmentOperator AssignmentExpression
          ;

        The left side is parsed in full first and only then checked as a
        target, so `1 + 2 = 3` fails after reading `1 + 2`.
        """
        left = self.parse_logical_or_expression()

        if not self._at(*ASSIGNMENT_TOKENS):
            return left

        operator = self.parse_assignment_operator().value
        self._check_valid_assignment_target(left, operator)
        return ASTNode(
            "AssignmentExpression",
            operator=operator,
            left=left,
            right=self.parse_assignment_expression(),
        )

    def parse_assignment_operator(self) -> Token:
        if self._at("SIMPLE_ASSIGN"):
            return self.eat("SIMPLE_ASSIGN")
        return self.eat("COMPLEX_ASSIGN")

    def _check_valid_assignment_target(self, node: ASTNode, operator: str) -> None:
        if node.kind not in VALID_ASSIGNMENT_TARGETS:
            raise SyntaxError(
                f"Invalid left-hand side in assignment expression: "
                f"{node.kind} before '{operator}'"
            )

    def parse_logical_or_expression(self) -> ASTNode:
        return self._logical_expression(self.parse_logical_and_expression, "LOGICAL_OR")

    def parse_logical_and_expression(self) -> ASTNode:
        return self._logical_expression(self.parse_equality_expression, "LOGICAL_AND")

    def parse_equality_expression(self) -> ASTNode:
        return self._binary_expression(
            self.parse_relational_expression, "EQUALITY_OPERATOR"
        )

    def parse_relational_expression(self) -> ASTNode:
        return self._binary_expression(
            self.parse_additive_expression, "RELATIONAL_OPERATOR"
        )

    def parse_additive_expression(self) -> ASTNode:
        return self._binary_expression(
            self.parse_multiplicative_expression, "ADDITIVE_OPERATOR"
        )

    def parse_multiplicative_expression(self) -> ASTNode:
        return self._binary_expression(
            self.parse_unary_expression, "MULTIPLICATIVE_OPERATOR"
        )

    def _binary_expression(
        self, operand: Callable[[], ASTNode], operator_token: str
    ) -> ASTNode:
        return self._fold_left("BinaryExpression", operand, operator_token)

    def _logical_expression(
        self, operand: Callable[[], ASTNode], operator_token: str
    ) -> ASTNode:
        return self._fold_left("LogicalExpression", operand, operator_token)

    def _fold_left(
        self, kind: str, operand: Callable[[], ASTNode], operator_token: str
    ) -> ASTNode:
        """Parse `operand (op operand)*` into a left-leaning chain of `kind` nodes."""
        left = operand()
        while self._at(operator_token):
            operator = self.eat(operator_token).value
            right = operand()
            left = ASTNode(kind, operator=operator, left=left, right=right)
        return left

    def parse_unary_expression(self) -> ASTNode:
        """
        UnaryExpression
          : LeftHandSideExpression
          | ADDITIVE_OPERATOR UnaryExpression
          | LOGICAL_NOT UnaryExpression
          ;
        """
        if self._at(*UNARY_TOKENS):
            operator = self.eat(self.lookahead.type).value
            return ASTNode(
                "UnaryExpression",
                operator=operator,
                argument=self.parse_unary_expression(),
            )
        return self.parse_left_hand_side_expression()

    def parse_left_hand_side_expression(self) -> ASTNode:
        return self.parse_call_member_expression()

    def parse_call_member_expression(self) -> ASTNode:
        """
        CallMemberExpression
          : MemberExpression
          | CallExpression
          ;
        """
        if self._at("super"):
            return self.parse_call_expression(self.parse_super())

        member = self.parse_member_expression()
        if self._at("("):
            return self.parse_call_expression(member)
        return member

    def parse_call_expression(self, callee: ASTNode) -> ASTNode:
        """
        CallExpression
          : Callee Arguments
          ;

        Callee
          : MemberExpression
          | CallExpression
          ;
        """
        call = ASTNode("CallExpression", callee=callee, arguments=self.parse_arguments())
        if self._at("("):
            call = self.parse_call_expression(call)
        return call

    def parse_arguments(self) -> list[ASTNode]:
        self.eat("(")
        arguments = [] if self._at(")") else self.parse_argument_list()
        self.eat(")")
        return arguments

    def parse_argument_list(self) -> list[ASTNode]:
        arguments = [self.parse_assignment_expression()]
        while self._at(","):
            self.eat(",")
            arguments.append(self.parse_assignment_expression())
        return arguments

    def parse_member_expression(self) -> ASTNode:
        """
        MemberExpression
          : PrimaryExpression
          | MemberExpression '.' Identifier
          | MemberExpression '[' Expression ']'
          ;
        """
        obj = self.parse_primary_expression()
        while self._at(".", "["):
            if self._at("."):
                self.eat(".")
                prop = self.parse_identifier()
                obj = ASTNode(
                    "MemberExpression", object=obj, property=prop, computed=False
                )
            else:
                self.eat("[")
                prop = self.parse_expression()
                self.eat("]")
                obj = ASTNode(
                    "MemberExpression", object=obj, property=prop, computed=True
                )
        return obj

    def parse_primary_expression(self) -> ASTNode:
        """
        PrimaryExpression
          : Literal
          | ParenthesizedExpression
          | Identifier
          | ThisExpression
          | NewExpression
          ;
        """
        token_type = self.lookahead.type
        if token_type in LITERAL_TOKENS:
            return self.parse_literal()
        if token_type == "(":
            return self.parse_parenthesized_expression()
        if token_type == "IDENTIFIER":
            return self.parse_identifier()
        if token_type == "this":
            return self.parse_this_expression()
        if token_type == "new":
            return self.parse_new_expression()
        if token_type == EOF:
            raise SyntaxError("Unexpected end of input, expected an expression")
        raise SyntaxError(
            f'Unexpected primary expression: "{self.lookahead.value}" '
            f"(line {self.lookahead.line}, col {self.lookahead.col})"
        )

    def parse_parenthesized_expression(self) -> ASTNode:
        self.eat("(")
        expression = self.parse_expression()
        self.eat(")")
        return expression

    def parse_new_expression(self) -> ASTNode:
        """
        NewExpression
          : 'new' MemberExpression Arguments
          ;
        """
        self.eat("new")
        callee = self.parse_member_expression()
        return ASTNode("NewExpression", callee=callee, arguments=self.parse_arguments())

    def parse_this_expression(self) -> ASTNode:
        self.eat("this")
        return ASTNode("ThisExpression")

    def parse_super(self) -> ASTNode:
        self.eat("super")
        return ASTNode("Super")

    def parse_identifier(self) -> ASTNode:
        name = self.eat("IDENTIFIER").value
        return ASTNode("Identifier", name=name)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def parse_literal(self) -> ASTNode:
        """
        Literal
          : NumericLiteral
          | StringLiteral
          | BooleanLiteral
          | NullLiteral
          ;
        """
        token_type = self.lookahead.type
        if token_type == "NUMBER":
            return self.parse_numeric_literal()
        if token_type == "STRING":
            return self.parse_string_literal()
        if token_type == "true":
            return self.parse_boolean_literal(True)
        if token_type == "false":
            return self.parse_boolean_literal(False)
        if token_type == "null":
            return self.parse_null_literal()
        raise SyntaxError(f'Literal: unexpected literal production "{self.lookahead.value}"')

    def parse_numeric_literal(self) -> ASTNode:
        token = self.eat("NUMBER")
        return ASTNode("NumericLiteral", value=int(token.value))

    def parse_string_literal(self) -> ASTNode:
        token = self.eat("STRING")
        return ASTNode("StringLiteral", value=token.value[1:-1])

    def parse_boolean_literal(self, value: bool) -> ASTNode:
        self.eat("true" if value else "false")
        return ASTNode("BooleanLiteral", value=value)

    def parse_null_literal(self) -> ASTNode:
        self.eat("null")
        return ASTNode("NullLiteral")
