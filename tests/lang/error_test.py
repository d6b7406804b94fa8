import io
import unittest

from termcolor import colored

from funlang.lang.error import ArithmeticFault, ArityMismatch, DuplicateDeclaration, ErrorHandler, GenericException, \
    InternalError, RecursionDepthExceeded, UnboundFunction, UnboundVariable
from funlang.syntax.operators import BinaryOperator


class GenericExceptionTestCase(unittest.TestCase):

    def test_messages(self):
        cases = {
            UnboundVariable("x", line=3): ("UnboundVariable", "variable 'x' is not declared in this scope", 3),
            UnboundFunction("f"): ("UnboundFunction", "function 'f' is not declared in this scope", None),
            DuplicateDeclaration("g", "function", line=1):
                ("DuplicateDeclaration", "function 'g' is already declared in this scope", 1),
            ArityMismatch("add", 2, 3, line=4): ("ArityMismatch", "function 'add' expects 2 argument(s), got 3", 4),
            ArithmeticFault(BinaryOperator.MOD): ("ArithmeticError", "'%' by zero", None),
            RecursionDepthExceeded(): ("RecursionDepthExceeded", "maximum recursion depth exceeded", None),
        }
        for error, (kind, msg, line) in cases.items():
            self.assertEqual(kind, error.kind)
            self.assertEqual(msg, error.msg)
            self.assertEqual(line, error.line)
            self.assertFalse(error.internal)

        self.assertEqual("3: UnboundVariable: variable 'x' is not declared in this scope", str(UnboundVariable("x", 3)))
        self.assertEqual("UnboundFunction: function 'f' is not declared in this scope", str(UnboundFunction("f")))

    def test_at(self):
        error = UnboundVariable("x")
        self.assertIs(error, error.at(7))
        self.assertEqual(7, error.line)
        error.at(9)
        self.assertEqual(7, error.line)

    def test_internal(self):
        error = InternalError("unknown statement '{}'", "Foo")
        self.assertTrue(error.internal)
        self.assertEqual("unknown statement 'Foo'", error.msg)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler("prog.fun", fatal=False, stream=self.stream)

    def test_format(self):
        message = self.handler.format(UnboundVariable("x", line=2))
        expected = (colored("prog.fun:2: ", attrs=["bold"]) + colored("error: ", "red", attrs=["bold"])
                    + colored("UnboundVariable: ", attrs=["bold"])
                    + "variable '" + colored("x", attrs=["bold"]) + "' is not declared in this scope")
        self.assertEqual(expected, message)

        self.assertIn("prog.fun: ", self.handler.format(ArithmeticFault(BinaryOperator.DIV)))
        self.assertIn("[internal] ", self.handler.format(InternalError("oops")))

    def test_throw(self):
        self.handler.throw(DuplicateDeclaration("x", line=5))
        self.handler.warn("something odd about '{}'", "y", line=6)

        lines = self.stream.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertIn("prog.fun:5: ", lines[0])
        self.assertIn("DuplicateDeclaration", lines[0])
        self.assertIn("prog.fun:6: ", lines[1])
        self.assertIn("warning: ", lines[1])

        self.handler.fatal = True
        self.assertRaises(SystemExit, self.handler.throw, UnboundFunction("f"))

    def test_context_manager(self):
        with self.handler:
            raise UnboundFunction("f", line=1)
        with self.handler:
            raise RecursionError()

        output = self.stream.getvalue()
        self.assertIn("UnboundFunction", output)
        self.assertIn("RecursionDepthExceeded", output)

        with self.assertRaises(KeyError):
            with self.handler:
                raise KeyError("k")
        self.assertIn("unknown error", self.stream.getvalue())

        with self.assertRaises(SystemExit):
            with self.handler:
                raise SystemExit(0)

    def test_generic(self):
        error = GenericException("'{}' and '{}'", ("a", "b"), line=2)
        self.assertEqual(["a", "b"], error.exprs)
        self.assertEqual("'a' and 'b'", error.msg)

    def test_scalar_exprs(self):
        cases = {
            42: ["42"],
            -1: ["-1"],
            BinaryOperator.DIV: ["/"],
            "x": ["x"],
        }
        for expr, exprs in cases.items():
            error = GenericException("bad value {}", expr)
            self.assertEqual(exprs, error.exprs, expr)
            self.assertEqual(f"bad value {exprs[0]}", error.msg, expr)

        error = InternalError("exit value {} already set", 0)
        self.assertEqual("exit value 0 already set", error.msg)


if __name__ == '__main__':
    unittest.main()
