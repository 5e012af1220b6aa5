"""
fnlang Recursive Descent Parser
===============================

This module implements a recursive descent parser for fnlang. It takes
the token list produced by the tokenizer and builds the AST defined in
fnlang.frontend.ast.

Grammar (EBNF)
--------------
program         ::= declaration*
declaration     ::= 'fn' '[' CONSTANT ']' IDENTIFIER argument_list
                    '{' statement_list '}'
argument_list   ::= '(' ( IDENTIFIER ( ',' IDENTIFIER )* )? ')'
statement_list  ::= statement*                      (up to, not incl. '}')
statement       ::= IDENTIFIER '=' expression ';'
                  | IDENTIFIER call ';'
call            ::= '(' expression_list ')'
expression_list ::= ( expression ( ',' expression )* )?  (up to ')')
expression      ::= CONSTANT | IDENTIFIER | IDENTIFIER call

Lookahead is always a single token. An identifier followed by '(' is a
call, in statement and expression position alike. Trailing commas are
rejected in both comma-separated lists.

Calls nested inside call arguments recurse; nesting deeper than
`Parser.MAX_CALL_DEPTH` raises a ParseError.

Each grammar rule is a public method that consumes tokens from the
parser's cursor; `Parser.position` tells how many tokens have been
consumed. List rules are loops, so stack depth does not grow with the
number of statements, arguments or declarations.

The first grammar violation raises a ParseError subclass and aborts the
whole parse; there is no error recovery.

Example Usage
-------------
>>> from fnlang.frontend.parser import parse_source
>>> from fnlang.frontend.ast import ASTPrinter
>>> ast = parse_source("fn[1] add(a, b) { c = add(a, b); }")
>>> print(ASTPrinter().print(ast))
Declare
  FunctionDeclare add(a, b) -> 1
    Statement
      Substitute
        Identifier c
        Call add
          Identifier a
          Identifier b
"""

from typing import Iterable, Optional, Sequence
import logging

from fnlang.errors import SourceLocation
from fnlang.frontend.lexer import Keyword, Punctuator, Token, TokenType, tokenize
from fnlang.frontend.ast import (
    AST,
    Constant,
    Identifier,
    Node,
    Operator,
    OperatorKind,
)
from fnlang.frontend.errors import (
    ParseError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser for fnlang.

    Usage:
        parser = Parser(tokens, filename)
        ast = parser.parse()

    Attributes:
        tokens: List of tokens to parse
        filename: Source filename, used for locations when there are no
            tokens to take one from
    """

    # Deepest allowed nesting of calls inside call arguments
    MAX_CALL_DEPTH = 128

    def __init__(self, tokens: Iterable[Token], filename: str = "<input>"):
        self.tokens = list(tokens)
        self.filename = self.tokens[0].filename if self.tokens else filename

        # Current position in token stream
        self._pos = 0

        # Declarations completed so far, reported on failure
        self._declarations_parsed = 0

        # Calls currently being parsed
        self._call_depth = 0

    @property
    def position(self) -> int:
        """Number of tokens consumed so far."""
        return self._pos

    def at_end(self) -> bool:
        """Check if every token has been consumed."""
        return self._pos >= len(self.tokens)

    def parse(self) -> Node:
        """
        Parse the whole token list.

        Returns:
            Node(DECLARE) holding one FUNCTION_DECLARE node per function

        Raises:
            ParseError: On the first grammar violation, with
                `declarations_parsed` set to the number of functions that
                parsed before it
        """
        self._declarations_parsed = 0
        self._call_depth = 0
        try:
            root = self.declarations()
        except ParseError as e:
            e.declarations_parsed = self._declarations_parsed
            logger.debug(
                f"{self.filename}: parse failed after "
                f"{self._declarations_parsed} declarations"
            )
            raise

        logger.debug(
            f"{self.filename}: parsed {len(root.children)} declarations "
            f"from {len(self.tokens)} tokens"
        )
        return root

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self) -> Optional[Token]:
        """Look at the current token, or None at end of input."""
        if self.at_end():
            return None
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self.tokens[self._pos]
        self._pos += 1
        return token

    def _check(self, punctuator: Punctuator) -> bool:
        """Check if the current token is the given punctuator."""
        token = self._peek()
        return token is not None and token.is_punctuator(punctuator)

    def _match(self, punctuator: Punctuator) -> Optional[Token]:
        """Consume the current token if it is the given punctuator."""
        if self._check(punctuator):
            return self._advance()
        return None

    def _expect(self, punctuator: Punctuator, rule: str) -> Token:
        """
        Expect and consume a specific punctuator.

        Raises:
            UnexpectedTokenError: If another token is found
            UnexpectedEndOfInputError: If the tokens are exhausted
        """
        if self._check(punctuator):
            return self._advance()
        raise self._unexpected(rule, (f"'{punctuator.value}'",))

    def _expect_type(
        self,
        token_type: TokenType,
        rule: str,
        expected: Sequence[str],
    ) -> Token:
        """Expect and consume a token of the given type."""
        token = self._peek()
        if token is not None and token.type == token_type:
            return self._advance()
        raise self._unexpected(rule, expected)

    def _unexpected(self, rule: str, expected: Sequence[str]) -> ParseError:
        """Build the error for the current position."""
        token = self._peek()
        if token is None:
            return UnexpectedEndOfInputError(rule, expected, self._end_location())
        return UnexpectedTokenError(token, rule, expected)

    def _end_location(self) -> SourceLocation:
        """Location reported for end of input: the last token, if any."""
        if self.tokens:
            return self.tokens[-1].location
        return SourceLocation(self.filename, 1, 1)

    def _current_location(self) -> SourceLocation:
        token = self._peek()
        return token.location if token is not None else self._end_location()

    # =========================================================================
    # Declarations
    # =========================================================================

    def declarations(self) -> Node:
        """Parse declarations until the tokens are exhausted."""
        root = Node(
            location=self._current_location(),
            operator=Operator.of(OperatorKind.DECLARE),
        )
        while not self.at_end():
            root.children.append(self.declaration())
            self._declarations_parsed += 1
        return root

    def declaration(self) -> Node:
        """
        Parse one function declaration:

            fn [ CONSTANT ] IDENTIFIER argument_list { statement_list }

        The bracketed constant is the declared return-value count; it is
        stored on the operator and not checked against the body.
        """
        token = self._peek()
        if token is None or not token.is_keyword(Keyword.FN):
            raise self._unexpected("declaration", ("'fn'",))
        location = self._advance().location

        self._expect(Punctuator.BRACKET_LEFT, "declaration")
        retnum = self._expect_type(
            TokenType.CONSTANT, "declaration", ("return count constant",)
        ).value
        self._expect(Punctuator.BRACKET_RIGHT, "declaration")
        name = self._expect_type(
            TokenType.IDENTIFIER, "declaration", ("function name",)
        ).value

        args = self.argument_list()

        self._expect(Punctuator.BRACE_LEFT, "declaration")
        body = self.statement_list()
        self._expect(Punctuator.BRACE_RIGHT, "declaration")

        return Node(
            location=location,
            operator=Operator.function_declare(name, args, retnum),
            children=[body],
        )

    def argument_list(self) -> list[str]:
        """
        Parse a parameter list: ( name , name , ... )

        Returns:
            Parameter names in order (repeats are kept)
        """
        self._expect(Punctuator.PAREN_LEFT, "argument_list")
        names: list[str] = []

        if self._match(Punctuator.PAREN_RIGHT):
            return names

        while True:
            name = self._expect_type(
                TokenType.IDENTIFIER, "argument_list", ("identifier",)
            )
            names.append(name.value)

            if self._match(Punctuator.PAREN_RIGHT):
                return names
            if not self._match(Punctuator.COMMA):
                raise self._unexpected("argument_list", ("','", "')'"))

    # =========================================================================
    # Statements
    # =========================================================================

    def statement_list(self) -> Node:
        """
        Parse statements up to (not including) the closing '}'.

        Returns:
            Node(STATEMENT) with the statements in source order
        """
        block = Node(
            location=self._current_location(),
            operator=Operator.of(OperatorKind.STATEMENT),
        )
        while not self._check(Punctuator.BRACE_RIGHT):
            if self.at_end():
                raise self._unexpected("statement_list", ("identifier", "'}'"))
            block.children.append(self.statement())
        return block

    def statement(self) -> AST:
        """
        Parse an assignment or a call statement.

            x = expression ;     -> Node(SUBSTITUTE, [Identifier x, expression])
            f ( args ) ;         -> Node(CALL f, args)
        """
        target = self._expect_type(TokenType.IDENTIFIER, "statement", ("identifier",))

        if self._match(Punctuator.EQUAL):
            value = self.expression()
            self._expect(Punctuator.SEMICOLON, "statement")
            return Node(
                location=target.location,
                operator=Operator.of(OperatorKind.SUBSTITUTE),
                children=[Identifier(location=target.location, name=target.value), value],
            )

        if self._check(Punctuator.PAREN_LEFT):
            node = self.call(target.value, target.location)
            self._expect(Punctuator.SEMICOLON, "statement")
            return node

        raise self._unexpected("statement", ("'='", "'('"))

    # =========================================================================
    # Expressions
    # =========================================================================

    def expression(self) -> AST:
        """Parse a constant, an identifier, or a call."""
        token = self._peek()

        if token is not None and token.type == TokenType.CONSTANT:
            self._advance()
            return Constant(location=token.location, value=token.value)

        if token is not None and token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._check(Punctuator.PAREN_LEFT):
                return self.call(token.value, token.location)
            return Identifier(location=token.location, name=token.value)

        raise self._unexpected("expression", ("constant", "identifier"))

    def expression_list(self) -> list[AST]:
        """
        Parse comma-separated expressions up to (not including) ')'.

        An empty list is accepted.
        """
        expressions: list[AST] = []
        if self._check(Punctuator.PAREN_RIGHT):
            return expressions

        while True:
            expressions.append(self.expression())
            if self._check(Punctuator.PAREN_RIGHT):
                return expressions
            if not self._match(Punctuator.COMMA):
                raise self._unexpected("expression_list", ("','", "')'"))

    def call(self, name: str, location: Optional[SourceLocation] = None) -> Node:
        """
        Parse the argument part of a call; the callee name has already
        been consumed and the cursor is on '('.
        """
        open_paren = self._expect(Punctuator.PAREN_LEFT, "call")
        if self._call_depth >= self.MAX_CALL_DEPTH:
            raise ParseError(
                "expression nesting too deep",
                rule="call",
                location=open_paren.location,
                hint=f"calls may be nested at most {self.MAX_CALL_DEPTH} deep",
            )

        self._call_depth += 1
        try:
            arguments = self.expression_list()
        finally:
            self._call_depth -= 1
        self._expect(Punctuator.PAREN_RIGHT, "call")
        return Node(
            location=location or open_paren.location,
            operator=Operator.call(name),
            children=arguments,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(tokens: Iterable[Token], filename: str = "<input>") -> Node:
    """
    Parse a token list into an AST.

    Raises:
        ParseError: On the first grammar violation
    """
    return Parser(tokens, filename).parse()


def try_parse(tokens: Iterable[Token], filename: str = "<input>") -> Optional[Node]:
    """Parse a token list, returning None instead of raising on failure."""
    try:
        return parse(tokens, filename)
    except ParseError as e:
        logger.debug(f"try_parse: {e}")
        return None


def parse_source(
    source: str,
    filename: str = "<input>",
    wrap_constants: bool = False,
) -> Node:
    """
    Tokenize and parse fnlang source text.

    Raises:
        LexicalError: If tokenization fails
        ParseError: If parsing fails
    """
    return parse(tokenize(source, filename, wrap_constants), filename)
