"""The single built-in of the Fun language: println. A user function with the same name takes priority over it."""

PRINTLN = "println"
SEPARATOR = " "   # written after every value, including the last one
TERMINATOR = "\n"


def format_line(values):
    """Returns the println rendering of values: 'v1 v2 v3 \\n'."""
    return "".join(f"{value}{SEPARATOR}" for value in values) + TERMINATOR


def is_builtin_call(name, scope):
    """Whether a call to name in scope should go to the built-in, i.e. no user function shadows it."""
    return name == PRINTLN and scope.resolve_function(name) is None


def println(scope, values):
    """Writes values through scope's output sink. Calls to println always evaluate to 0."""
    scope.print_line(values)
    return 0
