"""Error handling for the Fun interpreter. Only GenericExceptions should be raised while a program runs: if another type
of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a Fun error. msg is a str.format template whose
    placeholders are filled with exprs (the offending names), which are bolded when displayed.
    """
    kind = "GenericException"

    def __init__(self, msg, exprs=None, line=None, internal=False):
        if exprs is None:
            exprs = []
        if not isinstance(exprs, (list, tuple)):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)
        self.line = line
        self.internal = internal

        super().__init__(self.msg)

    def at(self, line):
        """Tags this error with line unless it already has one. Returns self so that it can be re-raised inline."""
        if self.line is None:
            self.line = line
        return self

    def colored_msg(self, color=None):
        """Returns self.msg with the offending names bolded (and colored, if color is given)."""
        attrs = ["bold"]
        return self.template.format(*(colored(expr, color, attrs=attrs) for expr in self.exprs))

    def __str__(self):
        if self.line is None:
            return f"{self.kind}: {self.msg}"
        return f"{self.line}: {self.kind}: {self.msg}"


class UnboundVariable(GenericException):
    kind = "UnboundVariable"

    def __init__(self, name, line=None):
        super().__init__("variable '{}' is not declared in this scope", name, line=line)
        self.name = name


class UnboundFunction(GenericException):
    kind = "UnboundFunction"

    def __init__(self, name, line=None):
        super().__init__("function '{}' is not declared in this scope", name, line=line)
        self.name = name


class DuplicateDeclaration(GenericException):
    kind = "DuplicateDeclaration"

    def __init__(self, name, what="variable", line=None):
        super().__init__("{} '{}' is already declared in this scope", (what, name), line=line)
        self.name = name
        self.what = what


class ArityMismatch(GenericException):
    kind = "ArityMismatch"

    def __init__(self, name, expected, actual, line=None):
        super().__init__("function '{}' expects {} argument(s), got {}", (name, expected, actual), line=line)
        self.name = name
        self.expected = expected
        self.actual = actual


class ArithmeticFault(GenericException, ArithmeticError):
    """Division or modulo by zero. Binary operations carry no line."""
    kind = "ArithmeticError"

    def __init__(self, operator, line=None):
        super().__init__("'{}' by zero", str(operator), line=line)
        self.operator = operator


class RecursionDepthExceeded(GenericException):
    kind = "RecursionDepthExceeded"

    def __init__(self, line=None):
        super().__init__("maximum recursion depth exceeded", line=line)


class InternalError(GenericException):
    """Interpreter contract violation. Never reachable from a valid program."""
    kind = "InternalError"

    def __init__(self, msg, exprs=None, line=None):
        super().__init__(msg, exprs, line=line, internal=True)


class ErrorHandler:
    """Reports errors to the host. Also a context manager that will silently suppress Python errors and report Fun
    errors instead.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, path="<program>", fatal=True, stream=None):
        self.path = path
        self.fatal = fatal
        self.stream = stream if stream is not None else sys.stderr

    def format(self, error, warning=False):
        """Returns the diagnostic line for error: '<path>:<line>: error: <msg>'."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        location = f"{self.path}:{error.line}: " if error.line is not None else f"{self.path}: "

        error_msg = colored(location, attrs=["bold"])
        if error.internal:
            error_msg += colored("[internal] ", color, attrs=["bold"])
        error_msg += colored("warning: " if warning else "error: ", color, attrs=["bold"])
        return error_msg + colored(f"{error.kind}: ", attrs=["bold"]) + error.colored_msg()

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args (see GenericException)."""
        print(self.format(GenericException(*args, **kwargs), warning=True), file=self.stream)

    def throw(self, error):
        """Prints error, then exits with status 1 if this handler is fatal. error must be a GenericException."""
        print(self.format(error), file=self.stream)
        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(RecursionDepthExceeded())
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(InternalError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}"))
            do_exit = True

        return not do_exit
