import io
import unittest

from funlang.lang import builtins
from funlang.lang.scope import Scope
from funlang.syntax.nodes import Block, FunctionDecl


class PrintlnTestCase(unittest.TestCase):

    def test_format_line(self):
        cases = {
            (): "\n",
            (0,): "0 \n",
            (1, 2, 3): "1 2 3 \n",
            (-5, 10 ** 12): f"-5 {10 ** 12} \n",
        }
        for values, result in cases.items():
            self.assertEqual(result, builtins.format_line(values), values)

    def test_println(self):
        stream = io.StringIO()
        scope = Scope(stream).child()

        self.assertEqual(0, builtins.println(scope, [4, 5]))
        self.assertEqual(0, builtins.println(scope, [6]))
        self.assertEqual("4 5 \n6 \n", stream.getvalue())

    def test_is_builtin_call(self):
        root = Scope(io.StringIO())
        self.assertTrue(builtins.is_builtin_call("println", root))
        self.assertFalse(builtins.is_builtin_call("print", root))

        inner = root.child()
        inner.declare_function("println", FunctionDecl(1, "println", ["x"], Block([])))
        self.assertFalse(builtins.is_builtin_call("println", inner.child()))
        self.assertTrue(builtins.is_builtin_call("println", root))

        root.declare_variable("println", 1)  # variables do not shadow functions
        self.assertTrue(builtins.is_builtin_call("println", root))


if __name__ == '__main__':
    unittest.main()
