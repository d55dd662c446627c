"""
Recursive-descent parser for Zod-style schema definitions.

Turns text such as ``z.object({ email: z.string().email() })`` into a schema
node tree. Nothing in the source is ever executed: factories and methods are
looked up in fixed tables and anything outside them is a syntax error.
"""
import copy
import functools
from collections.abc import Callable
from typing import Any, NamedTuple

import structlog

from ..exceptions import SchemaSyntaxError, SchemaTooDeepError
from ..models.nodes import (
    DEFAULT_MAX_DEPTH,
    ArrayNode,
    DateNode,
    DefaultNode,
    EnumNode,
    NumberCheck,
    NumberNode,
    ObjectNode,
    OptionalNode,
    SchemaNode,
    StringCheck,
    StringNode,
    UnsupportedNode,
)
from .lexer import Token, TokenType, tokenize

logger = structlog.get_logger(__name__)

NAMESPACE = "z"

# Number.MIN_SAFE_INTEGER / Number.MAX_SAFE_INTEGER
MIN_SAFE_INTEGER = -(2**53 - 1)
MAX_SAFE_INTEGER = 2**53 - 1

# Factories whose result has no precise descriptor mapping. Their arguments are
# still parsed (and must be well formed) but only the construct name is kept.
UNSUPPORTED_FACTORIES = frozenset({
    "boolean", "any", "unknown", "null", "undefined", "void", "never", "bigint",
    "literal", "union", "discriminatedUnion", "intersection", "tuple", "record",
    "map", "set", "nullable",
})

# String methods that add a check without a value. Each may take an optional
# error message or params argument, which is ignored.
STRING_FLAG_METHODS = frozenset({
    "email", "url", "uuid", "cuid", "cuid2", "ulid", "emoji", "datetime", "ip",
    "trim", "toLowerCase", "toUpperCase",
})
STRING_LENGTH_METHODS = frozenset({"min", "max", "length"})
STRING_TEXT_METHODS = frozenset({"startsWith", "endsWith", "includes"})

OBJECT_PASSTHROUGH_METHODS = frozenset({"strict", "passthrough", "strip", "nonstrict"})
ARRAY_LENGTH_METHODS = frozenset({"min", "max", "length"})


class Arg(NamedTuple):
    """A parsed call argument together with the token it started at."""
    value: Any
    token: Token


class ObjectLiteral(dict):
    """An object literal's entries plus the token of each property name."""

    def __init__(self) -> None:
        super().__init__()
        self.key_tokens: dict[str, Token] = {}


def parse_schema(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> SchemaNode:
    """Parse Zod-style schema source into a schema node tree.

    Raises SchemaSyntaxError for malformed or unsupported source and
    SchemaTooDeepError when nesting exceeds ``max_depth``.
    """
    return SchemaParser(source, max_depth=max_depth).parse()


class SchemaParser:
    def __init__(self, source: str, max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = tokenize(source)
        self.pos = 0
        self.max_depth = max_depth
        self.logger = logger.bind(parser="SchemaParser")
        self._variant_methods: dict[type, Callable[[Any, Token, list[Arg]], SchemaNode | None]] = {
            StringNode: self._string_method,
            NumberNode: self._number_method,
            DateNode: self._date_method,
            EnumNode: self._enum_method,
            ObjectNode: self._object_method,
            ArrayNode: self._array_method,
        }

    # --- Token helpers ---

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _error(self, message: str, token: Token | None = None) -> SchemaSyntaxError:
        token = token or self.current
        return SchemaSyntaxError(message, token.line, token.column)

    def _is_punct(self, value: str) -> bool:
        return self.current.type == TokenType.PUNCT and self.current.value == value

    def _accept_punct(self, value: str) -> bool:
        if self._is_punct(value):
            self._advance()
            return True
        return False

    def _expect_punct(self, value: str) -> Token:
        if not self._is_punct(value):
            raise self._error(f"Expected '{value}' but found {self.current.describe()}")
        return self._advance()

    def _expect_ident(self, what: str) -> Token:
        if self.current.type != TokenType.IDENT:
            raise self._error(f"Expected {what} but found {self.current.describe()}")
        return self._advance()

    def _check_depth(self, depth: int, token: Token) -> None:
        # Every schema expression argument and every array/object literal is one level
        if depth > self.max_depth:
            raise SchemaTooDeepError(self.max_depth, token.line, token.column)

    # --- Grammar ---

    def parse(self) -> SchemaNode:
        if self.current.type == TokenType.IDENT and self.current.value == "return":
            self._advance()
        node = self._parse_schema(0)
        while self._accept_punct(";"):
            pass
        if self.current.type != TokenType.EOF:
            raise self._error(f"Unexpected {self.current.describe()} after schema expression")
        self.logger.debug("Parsed schema source.", root=node.label, token_count=len(self.tokens))
        return node

    def _parse_schema(self, depth: int) -> SchemaNode:
        start = self.current
        self._check_depth(depth, start)
        if start.type != TokenType.IDENT or start.value != NAMESPACE:
            raise self._error(f"Expected a schema expression starting with '{NAMESPACE}.' but found {start.describe()}")
        self._advance()
        self._expect_punct(".")
        factory = self._expect_ident("a schema factory name")
        args = self._parse_call_arguments(depth)
        node = self._build_factory(factory, args)

        while self._is_punct("."):
            self._advance()
            method = self._expect_ident("a method name")
            method_args = self._parse_call_arguments(depth)
            node = self._apply_method(node, method, method_args)
        return node

    def _parse_call_arguments(self, depth: int) -> list[Arg]:
        self._expect_punct("(")
        args: list[Arg] = []
        while not self._is_punct(")"):
            token = self.current
            args.append(Arg(self._parse_value(depth + 1), token))
            if not self._accept_punct(","):
                break
        self._expect_punct(")")
        return args

    def _parse_value(self, depth: int) -> Any:
        """Parse a schema expression or a literal (string, number, boolean,
        null, array, object). Containers may hold either."""
        token = self.current
        self._check_depth(depth, token)

        if token.type == TokenType.IDENT:
            if token.value == NAMESPACE:
                return self._parse_schema(depth)
            if token.value == "true":
                self._advance()
                return True
            if token.value == "false":
                self._advance()
                return False
            if token.value in ("null", "undefined"):
                self._advance()
                return None
            raise self._error(f"Unexpected {token.describe()}; only literals and '{NAMESPACE}.' schema expressions are allowed")

        if token.type in (TokenType.STRING, TokenType.NUMBER, TokenType.REGEX):
            self._advance()
            return token.value

        if self._accept_punct("["):
            items: list[Any] = []
            while not self._is_punct("]"):
                items.append(self._parse_value(depth + 1))
                if not self._accept_punct(","):
                    break
            self._expect_punct("]")
            return items

        if self._accept_punct("{"):
            entries = ObjectLiteral()
            while not self._is_punct("}"):
                key_token = self.current
                if key_token.type not in (TokenType.IDENT, TokenType.STRING, TokenType.NUMBER):
                    raise self._error(f"Expected a property name but found {key_token.describe()}")
                self._advance()
                key = str(key_token.value)
                if key in entries:
                    raise self._error(f"Duplicate property name '{key}'", key_token)
                self._expect_punct(":")
                entries.key_tokens[key] = key_token
                entries[key] = self._parse_value(depth + 1)
                if not self._accept_punct(","):
                    break
            self._expect_punct("}")
            return entries

        raise self._error(f"Unexpected {token.describe()}")

    # --- Factories ---

    def _build_factory(self, factory: Token, args: list[Arg]) -> SchemaNode:
        name = factory.value
        if name in ("string", "number", "date"):
            self._expect_arg_count(factory, args, 0, 1) # Optional params object, ignored
            if name == "string":
                return StringNode()
            if name == "number":
                return NumberNode()
            return DateNode()

        if name == "enum":
            self._expect_arg_count(factory, args, 1, 2)
            values = args[0].value
            if not isinstance(values, list) or not values or not all(isinstance(v, str) for v in values):
                raise self._error("z.enum() expects a non-empty array of string literals", args[0].token)
            return EnumNode(values=values)

        if name == "object":
            self._expect_arg_count(factory, args, 1, 2)
            return ObjectNode(shape=self._shape_arg(args[0]))

        if name == "array":
            self._expect_arg_count(factory, args, 1, 2)
            return ArrayNode(element_type=self._schema_arg(args[0]))

        if name == "optional":
            self._expect_arg_count(factory, args, 1, 2)
            return OptionalNode(inner=self._schema_arg(args[0]))

        if name in UNSUPPORTED_FACTORIES:
            return UnsupportedNode(construct_name=f"{NAMESPACE}.{name}()")

        raise self._error(f"Unknown schema factory '{NAMESPACE}.{name}'", factory)

    # --- Methods ---

    def _apply_method(self, node: SchemaNode, method: Token, args: list[Arg]) -> SchemaNode:
        name = method.value

        if name == "optional":
            self._expect_arg_count(method, args, 0, 0)
            return OptionalNode(inner=node)
        if name == "default":
            self._expect_arg_count(method, args, 1, 1)
            return DefaultNode(inner=node, default_value=self._literal_producer(args[0]))
        if name == "array":
            self._expect_arg_count(method, args, 0, 0)
            return ArrayNode(element_type=node)
        if name in ("nullable", "nullish"):
            self._expect_arg_count(method, args, 0, 0)
            return UnsupportedNode(construct_name=f".{name}()")
        if name in ("or", "and"):
            self._expect_arg_count(method, args, 1, 1)
            self._schema_arg(args[0])
            return UnsupportedNode(construct_name=f".{name}()")
        if name == "describe":
            self._expect_arg_count(method, args, 1, 1)
            self._string_arg(args[0])
            return node

        handler = self._variant_methods.get(type(node))
        if handler is not None:
            result = handler(node, method, args)
            if result is not None:
                return result
        raise self._error(f"Method '.{name}()' is not available on {node.label} schemas", method)

    def _string_method(self, node: StringNode, method: Token, args: list[Arg]) -> StringNode | None:
        name = method.value
        if name in STRING_FLAG_METHODS:
            self._expect_arg_count(method, args, 0, 1)
            check = StringCheck(kind=name)
        elif name in STRING_LENGTH_METHODS:
            self._expect_arg_count(method, args, 1, 2)
            check = StringCheck(kind=name, value=self._int_arg(args[0]))
        elif name == "nonempty":
            self._expect_arg_count(method, args, 0, 1)
            check = StringCheck(kind="min", value=1)
        elif name == "regex":
            self._expect_arg_count(method, args, 1, 2)
            pattern = args[0]
            if pattern.token.type not in (TokenType.REGEX, TokenType.STRING):
                raise self._error("regex() expects a regular expression literal or a string", pattern.token)
            check = StringCheck(kind="regex", value=pattern.value)
        elif name in STRING_TEXT_METHODS:
            self._expect_arg_count(method, args, 1, 2)
            check = StringCheck(kind=name, value=self._string_arg(args[0]))
        else:
            return None
        return StringNode(checks=[*node.checks, check])

    def _number_method(self, node: NumberNode, method: Token, args: list[Arg]) -> NumberNode | None:
        name = method.value
        checks: list[NumberCheck]
        if name in ("min", "gte", "gt", "max", "lte", "lt"):
            self._expect_arg_count(method, args, 1, 2)
            kind = "min" if name in ("min", "gte", "gt") else "max"
            checks = [NumberCheck(kind=kind, value=self._number_arg(args[0]), inclusive=name not in ("gt", "lt"))]
        elif name in ("positive", "nonnegative", "negative", "nonpositive"):
            self._expect_arg_count(method, args, 0, 1)
            kind = "min" if name in ("positive", "nonnegative") else "max"
            checks = [NumberCheck(kind=kind, value=0, inclusive=name.startswith("non"))]
        elif name in ("int", "finite"):
            self._expect_arg_count(method, args, 0, 1)
            checks = [NumberCheck(kind=name)]
        elif name == "safe":
            self._expect_arg_count(method, args, 0, 1)
            checks = [
                NumberCheck(kind="min", value=MIN_SAFE_INTEGER),
                NumberCheck(kind="max", value=MAX_SAFE_INTEGER),
            ]
        elif name in ("multipleOf", "step"):
            self._expect_arg_count(method, args, 1, 2)
            checks = [NumberCheck(kind="multipleOf", value=self._number_arg(args[0]))]
        else:
            return None
        return NumberNode(checks=[*node.checks, *checks])

    def _date_method(self, node: DateNode, method: Token, args: list[Arg]) -> DateNode | None:
        if method.value in ("min", "max"):
            # Date bounds have nowhere to go in the descriptor
            self._expect_arg_count(method, args, 1, 2)
            return node
        return None

    def _enum_method(self, node: EnumNode, method: Token, args: list[Arg]) -> EnumNode | None:
        name = method.value
        if name not in ("extract", "exclude"):
            return None
        self._expect_arg_count(method, args, 1, 2)
        selected = args[0].value
        if not isinstance(selected, list) or not all(isinstance(v, str) for v in selected):
            raise self._error(f"{name}() expects an array of string literals", args[0].token)
        if name == "extract":
            return EnumNode(values=selected)
        return EnumNode(values=[v for v in node.values if v not in selected])

    def _object_method(self, node: ObjectNode, method: Token, args: list[Arg]) -> SchemaNode | None:
        name = method.value
        if name in OBJECT_PASSTHROUGH_METHODS:
            self._expect_arg_count(method, args, 0, 0)
            return node
        if name == "partial":
            self._expect_arg_count(method, args, 0, 0)
            return ObjectNode(shape={
                key: field if isinstance(field, OptionalNode) else OptionalNode(inner=field)
                for key, field in node.shape.items()
            })
        if name == "required":
            self._expect_arg_count(method, args, 0, 0)
            shape = {}
            for key, field in node.shape.items():
                while isinstance(field, OptionalNode):
                    field = field.inner
                shape[key] = field
            return ObjectNode(shape=shape)
        if name in ("extend", "merge"):
            self._expect_arg_count(method, args, 1, 1)
            if name == "extend":
                extra = self._shape_arg(args[0])
            else:
                other = args[0].value
                if not isinstance(other, ObjectNode):
                    raise self._error("merge() expects an object schema", args[0].token)
                extra = other.shape
            return ObjectNode(shape={**node.shape, **extra})
        if name in ("pick", "omit"):
            self._expect_arg_count(method, args, 1, 1)
            mask = args[0].value
            if not isinstance(mask, dict) or not all(isinstance(v, bool) for v in mask.values()):
                raise self._error(f"{name}() expects an object literal of boolean flags", args[0].token)
            if name == "pick":
                return ObjectNode(shape={key: node.shape[key] for key, keep in mask.items() if keep and key in node.shape})
            return ObjectNode(shape={key: field for key, field in node.shape.items() if not mask.get(key, False)})
        if name == "keyof":
            self._expect_arg_count(method, args, 0, 0)
            return EnumNode(values=list(node.shape))
        return None

    def _array_method(self, node: ArrayNode, method: Token, args: list[Arg]) -> ArrayNode | None:
        name = method.value
        if name in ARRAY_LENGTH_METHODS:
            self._expect_arg_count(method, args, 1, 2)
            self._int_arg(args[0])
            return node
        if name == "nonempty":
            self._expect_arg_count(method, args, 0, 1)
            return node
        return None

    # --- Argument helpers ---

    def _expect_arg_count(self, callee: Token, args: list[Arg], minimum: int, maximum: int) -> None:
        if minimum <= len(args) <= maximum:
            return
        if minimum == maximum:
            expected = f"{minimum} argument{'s' if minimum != 1 else ''}"
        else:
            expected = f"{minimum} to {maximum} arguments"
        raise self._error(f"'{callee.value}' expects {expected} but got {len(args)}", callee)

    def _schema_arg(self, arg: Arg) -> SchemaNode:
        if not isinstance(arg.value, SchemaNode):
            raise self._error("Expected a schema expression", arg.token)
        return arg.value

    def _shape_arg(self, arg: Arg) -> dict[str, SchemaNode]:
        shape = arg.value
        if not isinstance(shape, dict):
            raise self._error("Expected an object literal mapping field names to schemas", arg.token)
        for key, value in shape.items():
            if not isinstance(value, SchemaNode):
                key_token = getattr(shape, "key_tokens", {}).get(key, arg.token)
                raise self._error(f"Field '{key}' must be a schema expression", key_token)
        return dict(shape)

    def _string_arg(self, arg: Arg) -> str:
        if arg.token.type != TokenType.STRING:
            raise self._error("Expected a string literal", arg.token)
        return arg.value

    def _number_arg(self, arg: Arg) -> int | float:
        if arg.token.type != TokenType.NUMBER:
            raise self._error("Expected a number literal", arg.token)
        return arg.value

    def _int_arg(self, arg: Arg) -> int:
        if arg.token.type != TokenType.NUMBER or not isinstance(arg.value, int):
            raise self._error("Expected an integer literal", arg.token)
        return arg.value

    def _literal_producer(self, arg: Arg) -> Callable[[], Any]:
        if _contains_schema(arg.value):
            raise self._error("default() expects a literal value", arg.token)
        # Each call hands out an independent copy so descriptors never share it
        return functools.partial(copy.deepcopy, _plain_literal(arg.value))


def _contains_schema(value: Any) -> bool:
    if isinstance(value, SchemaNode):
        return True
    if isinstance(value, list):
        return any(_contains_schema(item) for item in value)
    if isinstance(value, dict):
        return any(_contains_schema(item) for item in value.values())
    return False


def _plain_literal(value: Any) -> Any:
    if isinstance(value, list):
        return [_plain_literal(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain_literal(item) for key, item in value.items()}
    return value
