"""Syntax tree of a Pine program: expressions, statements and their parts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .values import NA


class BinOp(Enum):
    """Binary operators; the value is the key the value layer understands."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EQ = "=="
    NOT_EQ = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQ = "<="
    GREATER_EQ = ">="
    AND = "and"
    OR = "or"


class UnOp(Enum):
    """Unary operators."""

    NEG = "-"
    NOT = "not"


class TypeQualifier(Enum):
    """Qualifier written before a declaration's type."""

    CONST = "const"
    INPUT = "input"
    SIMPLE = "simple"
    SERIES = "series"


# Expressions


@dataclass
class Literal:
    """A literal number, string, boolean or ``na``."""

    value: Any = NA


@dataclass
class HexColor:
    """A colour literal such as ``#ff0000``; it evaluates to its text."""

    hex: str


@dataclass
class Variable:
    """A reference to a name."""

    name: str


@dataclass
class Binary:
    """A binary operation."""

    left: Any
    op: BinOp
    right: Any


@dataclass
class Unary:
    """A unary operation."""

    op: UnOp
    operand: Any


@dataclass
class Ternary:
    """``condition ? then_expr : else_expr``."""

    condition: Any
    then_expr: Any
    else_expr: Any


@dataclass
class IfExpr:
    """An ``if`` used as an expression; without an else branch it yields ``na``."""

    condition: Any
    then_expr: Any
    else_if_branches: list = field(default_factory=list)
    else_expr: Optional[Any] = None


@dataclass
class ArrayLiteral:
    """``[a, b, c]``."""

    elements: list = field(default_factory=list)


@dataclass
class Index:
    """``expr[index]``: array element or series history."""

    expr: Any
    index: Any


@dataclass
class Switch:
    """A switch expression; ``cases`` holds ``(pattern, result)`` pairs."""

    value: Any
    cases: list = field(default_factory=list)


@dataclass
class Call:
    """A call, with optional explicit type arguments such as ``array.new<float>``."""

    callee: Any
    args: list = field(default_factory=list)
    type_args: list = field(default_factory=list)


@dataclass
class MemberAccess:
    """``object.member``."""

    object: Any
    member: str


@dataclass
class FunctionExpr:
    """An anonymous function."""

    params: list = field(default_factory=list)
    body: list = field(default_factory=list)


# Call arguments and declaration parts


@dataclass
class PositionalArg:
    """An argument given by position."""

    value: Any


@dataclass
class NamedArgument:
    """An argument given as ``name = value``."""

    name: str
    value: Any


@dataclass
class FunctionParam:
    """A function parameter."""

    name: str
    type_qualifier: Optional[TypeQualifier] = None
    type_annotation: Optional[str] = None


@dataclass
class MethodParam:
    """A method parameter, which may carry a default expression."""

    name: str
    type_annotation: Optional[str] = None
    default_value: Optional[Any] = None


@dataclass
class TypeField:
    """A field of a user-defined type."""

    name: str
    type_annotation: Optional[str] = None
    default_value: Optional[Any] = None


@dataclass
class EnumField:
    """A member of an enum declaration with an optional display title."""

    name: str
    title: Optional[str] = None


class ExportKind(Enum):
    """What an export statement names."""

    TYPE = "type"
    FUNCTION = "function"


@dataclass
class ExportItem:
    """The item an export statement publishes."""

    kind: ExportKind
    name: str


# Statements


@dataclass
class VarDecl:
    """A variable declaration; without an initializer the value is ``na``."""

    name: str
    initializer: Optional[Any] = None
    type_qualifier: Optional[TypeQualifier] = None
    type_annotation: Optional[str] = None
    is_varip: bool = False


@dataclass
class Assignment:
    """``target := value`` where the target is a variable or a member."""

    target: Any
    value: Any


@dataclass
class TupleAssignment:
    """``[a, b] = value``."""

    names: list
    value: Any


@dataclass
class ExpressionStmt:
    """An expression evaluated for its effect or as a function's result."""

    expr: Any


@dataclass
class If:
    """An ``if`` statement; ``else_if_branches`` holds ``(condition, body)`` pairs."""

    condition: Any
    then_branch: list = field(default_factory=list)
    else_if_branches: list = field(default_factory=list)
    else_branch: Optional[list] = None


@dataclass
class For:
    """``for var_name = start to end``, inclusive of both bounds."""

    var_name: str
    start: Any
    end: Any
    body: list = field(default_factory=list)


@dataclass
class ForIn:
    """``for item in collection`` or ``for [index, item] in collection``."""

    item_var: str
    collection: Any
    body: list = field(default_factory=list)
    index_var: Optional[str] = None


@dataclass
class While:
    """A ``while`` loop."""

    condition: Any
    body: list = field(default_factory=list)


@dataclass
class Break:
    """Leave the innermost loop."""


@dataclass
class Continue:
    """Go on to the next iteration of the innermost loop."""


@dataclass
class TypeDecl:
    """A user-defined type."""

    name: str
    fields: list = field(default_factory=list)
    export: bool = False


@dataclass
class EnumDecl:
    """An enum declaration."""

    name: str
    fields: list = field(default_factory=list)
    export: bool = False


@dataclass
class Export:
    """An export statement."""

    item: ExportItem


@dataclass
class Import:
    """``import path as alias``."""

    path: str
    alias: str


@dataclass
class MethodDecl:
    """A method; its first parameter's type names the type it belongs to."""

    name: str
    params: list = field(default_factory=list)
    body: list = field(default_factory=list)
    export: bool = False


@dataclass
class FunctionDecl:
    """A named function declaration."""

    name: str
    params: list = field(default_factory=list)
    body: list = field(default_factory=list)
    export: bool = False


@dataclass
class Program:
    """A whole script: its statements in order."""

    statements: list = field(default_factory=list)


def literal_value(literal: Any) -> Any:
    """Return the runtime value a literal node stands for."""
    if isinstance(literal, HexColor):
        return literal.hex
    if not isinstance(literal, Literal):
        raise TypeError(f"not a literal: {literal!r}")
    value = literal.value
    if isinstance(value, bool) or value is NA or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    raise TypeError(f"unsupported literal value: {value!r}")