"""Tree-walking evaluation of Fun programs. Basic flow:
    1. Expressions are evaluated to ints against a Scope. They never return from a function themselves, but a
       FunctionCall runs a function body, which may.
    2. Statements are executed for their effect on the Scope. Return, If and While produce an exit value (an
       Optional[int]) when a return was reached, which every enclosing Block forwards up until a function call (or the
       program) consumes it.

Each Block runs in a fresh child of the scope it is executed in. A function body runs in a child of the *call site*
scope, not of the scope it was declared in: function bodies see their parameters plus whatever is visible from where
they are called.
"""

import logging

from funlang.lang import builtins
from funlang.lang.error import ArithmeticFault, ArityMismatch, GenericException, InternalError, \
    RecursionDepthExceeded, UnboundFunction, UnboundVariable
from funlang.syntax.nodes import Assignment, BinaryOp, EXPRESSIONS, FunctionCall, FunctionDecl, If, Literal, \
    Program, Return, VariableDeclaration, VariableRef, While

logger = logging.getLogger(__name__)


class Evaluator:
    """Walks AST nodes against Scopes. One Evaluator can run any number of programs, one at a time. At most max_depth
    user function calls may be active at once (None for no limit other than Python's own).
    """

    def __init__(self, max_depth=None):
        self.max_depth = max_depth
        self.depth = 0  # number of active user function calls

    def execute(self, program, scope):
        """Runs program in a child of scope. Returns the value of a top-level return, or None."""
        if not isinstance(program, Program):
            raise InternalError("expected Program, got '{}'", type(program).__name__)
        return self.exec_block(program.block, scope)

    def eval_expression(self, expr, scope):
        """Evaluates expr to an int."""
        if isinstance(expr, Literal):
            return expr.value

        elif isinstance(expr, VariableRef):
            value = scope.resolve_variable(expr.name)
            if value is None:
                raise UnboundVariable(expr.name, line=expr.line)
            return value

        elif isinstance(expr, BinaryOp):
            left = self.eval_expression(expr.left, scope)
            right = self.eval_expression(expr.right, scope)  # no short-circuit, even for && and ||
            try:
                return expr.operator.apply(left, right)
            except ZeroDivisionError:
                raise ArithmeticFault(expr.operator) from None

        elif isinstance(expr, FunctionCall):
            return self.call(expr, scope)

        raise InternalError("unknown expression '{}'", type(expr).__name__)

    def call(self, call, scope):
        """Evaluates a FunctionCall made from scope."""
        values = [self.eval_expression(arg, scope) for arg in call.args]

        if builtins.is_builtin_call(call.name, scope):
            return builtins.println(scope, values)

        function = scope.resolve_function(call.name)
        if function is None:
            raise UnboundFunction(call.name, line=call.line)
        if len(values) != function.arity:
            raise ArityMismatch(call.name, function.arity, len(values), line=call.line)

        logger.debug("line %s: calling %s with %s", call.line, call.name, values)

        call_scope = scope.child()
        for param, value in zip(function.params, values):
            try:
                call_scope.declare_variable(param, value)
            except GenericException as error:
                raise error.at(function.line)

        if self.max_depth is not None and self.depth >= self.max_depth:
            raise RecursionDepthExceeded(line=call.line)

        self.depth += 1
        try:
            result = self.exec_block(function.body, call_scope)
        finally:
            self.depth -= 1
        return 0 if result is None else result

    def exec_block(self, block, scope):
        """Runs block's statements in a child of scope, stopping at the first one that returns. Returns the exit value,
        or None if no return was reached (which is not the same as returning 0).
        """
        block_scope = scope.child()
        for statement in block.statements:
            result = self.exec_statement(statement, block_scope)
            if result is not None:
                return result
        return None

    def exec_statement(self, statement, scope):
        """Executes statement in scope. Returns an exit value if the statement returned, else None."""
        if isinstance(statement, EXPRESSIONS):
            self.eval_expression(statement, scope)  # value is discarded
            return None

        elif isinstance(statement, VariableDeclaration):
            value = 0 if statement.expression is None else self.eval_expression(statement.expression, scope)
            scope.declare_variable(statement.name, value, line=statement.line)
            return None

        elif isinstance(statement, Assignment):
            value = self.eval_expression(statement.expression, scope)
            scope.assign(statement.name, value, line=statement.line)
            return None

        elif isinstance(statement, FunctionDecl):
            scope.declare_function(statement.name, statement, line=statement.line)
            return None

        elif isinstance(statement, If):
            if self.eval_expression(statement.condition, scope) != 0:
                result = self.exec_block(statement.if_block, scope)
            elif statement.else_block is not None:
                result = self.exec_block(statement.else_block, scope)
            else:
                result = None
            return self._exit(scope, result)

        elif isinstance(statement, While):
            while self.eval_expression(statement.condition, scope) != 0:
                result = self.exec_block(statement.body, scope)
                if result is not None:
                    return self._exit(scope, result)
            return None

        elif isinstance(statement, Return):
            return self._exit(scope, self.eval_expression(statement.expression, scope))

        raise InternalError("unknown statement '{}'", type(statement).__name__)

    @staticmethod
    def _exit(scope, result):
        """Records result as scope's exit value (if there is one) and passes it on."""
        if result is not None:
            scope.set_exit_value(result)
        return result
