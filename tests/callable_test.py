import io
import unittest

from gox.core.callable import GoxCallable, GoxFunction
from gox.core.environment import Environment
from gox.core.evaluator import Interpreter
from gox.core.natives import NativeFunction, Registry, default_registry
from gox.core.parser import parse
from gox.core.scanner import scan


def run(source, natives):
    out = io.StringIO()
    error = Interpreter(natives=natives, out=out).interpret(parse(scan(source)))
    return out.getvalue().splitlines(), error


class NativeTestCase(unittest.TestCase):

    def test_native_function(self):
        native = NativeFunction("twice", 1, lambda value: value * 2)
        self.assertIsInstance(native, GoxCallable)
        self.assertEqual(1, native.arity())
        self.assertEqual(8.0, native.call(None, [4.0]))
        self.assertEqual("<native fn twice>", str(native))

    def test_registry(self):
        registry = Registry()

        @registry.register("pi", 0)
        def pi():
            return 3.0

        self.assertEqual(3.0, pi())  # decorator returns the function unchanged
        self.assertIn("pi", registry)
        self.assertEqual(1, len(registry))
        self.assertEqual(["pi"], [native.name for native in registry])

        lines, error = run("print pi() + 1;", registry)
        self.assertIsNone(error)
        self.assertEqual(["4"], lines)

    def test_default_registry_clock(self):
        registry = default_registry(clock=lambda: 42)
        self.assertEqual(["clock"], [native.name for native in registry])

        lines, error = run("print clock(); print clock;", registry)
        self.assertIsNone(error)
        self.assertEqual(["42", "<native fn clock>"], lines)

        lines, error = run("clock(1);", registry)
        self.assertEqual("invalid number of arguments", error.msg)

    def test_real_clock_is_a_number(self):
        lines, error = run("var start = clock(); print clock() - start >= 0;", default_registry())
        self.assertIsNone(error)
        self.assertEqual(["true"], lines)

    def test_natives_can_be_shadowed(self):
        lines, error = run("fun clock() { return \"mine\"; } print clock();", default_registry(clock=lambda: 1))
        self.assertEqual(["mine"], lines)

    def test_empty_registry(self):
        lines, error = run("clock();", Registry())
        self.assertEqual("undefined variable 'clock'", error.msg)


class GoxFunctionTestCase(unittest.TestCase):

    def test_arity_and_display(self):
        declaration = parse(scan("fun area(width, height) { return width * height; }"))[0]
        function = GoxFunction(declaration, Environment())
        self.assertEqual(2, function.arity())
        self.assertEqual("<fn area>", str(function))

    def test_call_binds_parameters_in_fresh_scope(self):
        declaration = parse(scan("fun area(width, height) { return width * height; }"))[0]
        closure = Environment()
        function = GoxFunction(declaration, closure)

        interpreter = Interpreter(natives=Registry())
        self.assertEqual(6.0, function.call(interpreter, [2.0, 3.0]))
        self.assertNotIn("width", closure)
        self.assertIs(interpreter.globals, interpreter.environment)

    def test_call_without_return_is_nil(self):
        declaration = parse(scan("fun noop(a) { a; }"))[0]
        function = GoxFunction(declaration, Environment())
        self.assertIsNone(function.call(Interpreter(natives=Registry()), [1.0]))


if __name__ == '__main__':
    unittest.main()
