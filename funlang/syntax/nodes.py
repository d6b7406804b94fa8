"""Abstract syntax tree for the Fun language. Nodes are immutable values produced by an external parser (or built
directly in Python) and consumed by funlang.lang.evaluator.

The node set is closed:

```
<program>    ::= <block>
<block>      ::= <statement>*
<statement>  ::= <expression>                         ; evaluated for side effects only
               | "var" <name> ["=" <expression>]      ; VariableDeclaration
               | <name> "=" <expression>              ; Assignment
               | "if" <expression> <block> [<block>]  ; If
               | "while" <expression> <block>         ; While
               | "return" <expression>                ; Return
               | "fun" <name> <name>* <block>         ; FunctionDecl
<expression> ::= <int>                                ; Literal
               | <expression> <op> <expression>       ; BinaryOp
               | <name>                               ; VariableRef
               | <name> "(" <expression>* ")"         ; FunctionCall
```

Nodes that the evaluator can fail on carry the source line they came from, so that errors can point at it.
"""

from dataclasses import dataclass, fields
from typing import Optional, Tuple, Union

from funlang.syntax.operators import BinaryOperator


class Node:
    """Superclass of every AST node."""

    def display(self, indents=0):
        """Recursively displays the tree rooted at this node in a readable format.

        Format:
        <Node>(<field>=<value>, ...,
            <child Node>(...),
            ...
        )
        """
        padding = "    " * indents
        scalars, children = [], []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, tuple) and value and all(isinstance(item, Node) for item in value):
                children.extend(value)
            elif value is not None and value != ():
                scalars.append(f"{field.name}={value!r}" if not isinstance(value, BinaryOperator)
                               else f"{field.name}='{value}'")

        result = f"{padding}{type(self).__name__}({', '.join(scalars)}"
        if children:
            result += "," if scalars else ""
            for child in children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{padding}"
        return result + ")"

    def __str__(self):
        return self.display()


@dataclass(frozen=True)
class Literal(Node):
    value: int


@dataclass(frozen=True)
class BinaryOp(Node):
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class VariableRef(Node):
    line: int
    name: str


@dataclass(frozen=True)
class FunctionCall(Node):
    line: int
    name: str
    args: Tuple["Expression", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))


Expression = Union[Literal, BinaryOp, VariableRef, FunctionCall]
EXPRESSIONS = (Literal, BinaryOp, VariableRef, FunctionCall)


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple["Statement", ...] = ()

    def __post_init__(self):
        statements = tuple(self.statements)
        for statement in statements:
            if not isinstance(statement, STATEMENTS):
                raise TypeError(f"{type(statement).__name__} is not a statement")
        object.__setattr__(self, "statements", statements)

    def __len__(self):
        return len(self.statements)

    def __iter__(self):
        return iter(self.statements)


@dataclass(frozen=True)
class VariableDeclaration(Node):
    line: int
    name: str
    expression: Optional[Expression] = None


@dataclass(frozen=True)
class Assignment(Node):
    line: int
    name: str
    expression: Expression


@dataclass(frozen=True)
class If(Node):
    condition: Expression
    if_block: Block
    else_block: Optional[Block] = None


@dataclass(frozen=True)
class While(Node):
    condition: Expression
    body: Block


@dataclass(frozen=True)
class Return(Node):
    expression: Expression


@dataclass(frozen=True)
class FunctionDecl(Node):
    """Named function. Declaring one does not capture the declaring scope: its body is run in a child of whatever
    scope the call happens in.
    """
    line: int
    name: str
    params: Tuple[str, ...]
    body: Block

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def arity(self):
        return len(self.params)


Statement = Union[Literal, BinaryOp, VariableRef, FunctionCall, VariableDeclaration, Assignment, If, While, Return,
                  FunctionDecl]
STATEMENTS = EXPRESSIONS + (VariableDeclaration, Assignment, If, While, Return, FunctionDecl)


@dataclass(frozen=True)
class Program(Node):
    """Root of a parsed source file: a single top-level block."""
    block: Block
