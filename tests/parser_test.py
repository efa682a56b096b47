import unittest

from gox.core import ast
from gox.core.parser import Parser, parse
from gox.core.printer import AstPrinter
from gox.core.scanner import scan
from gox.core.tokens import TokenType
from gox.lang.error import ParseError


def printed(source):
    return AstPrinter().print(parse(scan(source)))


def parse_errors(source):
    parser = Parser(scan(source))
    try:
        parser.parse()
    except ParseError:
        pass
    return parser.errors


class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "1 + 2 * 3;": "(; (+ 1 (* 2 3)))",
            "(1 + 2) * 3;": "(; (* (group (+ 1 2)) 3))",
            "1 - 2 - 3;": "(; (- (- 1 2) 3))",
            "8 / 4 / 2;": "(; (/ (/ 8 4) 2))",
            "-1 * 2;": "(; (* (- 1) 2))",
            "!!true;": "(; (! (! true)))",
            "1 < 2 == 3 >= 4;": "(; (== (< 1 2) (>= 3 4)))",
            "a or b and c;": "(; (or a (and b c)))",
            "a and b or c and d;": "(; (or (and a b) (and c d)))",
            "1 + 2 != 4 - 1;": "(; (!= (+ 1 2) (- 4 1)))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, printed(case), case)

    def test_assignment(self):
        cases = {
            "a = 1;": "(; (= a 1))",
            "a = b = 2;": "(; (= a (= b 2)))",
            "a = b or c;": "(; (= a (or b c)))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, printed(case), case)

    def test_invalid_assignment_target(self):
        should_fail = ["1 = 2;", "(a) = 3;", "a + b = c;", "f() = 1;"]
        for case in should_fail:
            errors = parse_errors(case)
            self.assertEqual(1, len(errors), case)
            self.assertEqual("invalid assignment target", errors[0].msg, case)
            self.assertEqual(TokenType.EQUAL, errors[0].token.type, case)

    def test_calls(self):
        cases = {
            "f();": "(; (call f))",
            "f(1, \"two\", g(3));": '(; (call f 1 "two" (call g 3)))',
            "f(1)(2);": "(; (call (call f 1) 2))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, printed(case), case)

        call = parse(scan("clock(\n);"))[0].expr
        self.assertIsInstance(call, ast.Call)
        self.assertEqual(TokenType.RIGHT_PAREN, call.paren.type)
        self.assertEqual(2, call.paren.line)

    def test_literals(self):
        cases = {"nil;": "(; nil)", "true;": "(; true)", "false;": "(; false)", "2.5;": "(; 2.5)",
                 "\"s\";": '(; "s")'}
        for case, expected in cases.items():
            self.assertEqual(expected, printed(case), case)


class StatementTestCase(unittest.TestCase):

    def test_declarations(self):
        cases = {
            "var a;": "(var a)",
            "var a = 1 + 2;": "(var a (+ 1 2))",
            "print a;": "(print a)",
            "{ var a = 1; print a; }": "(block (var a 1) (print a))",
            "if (a) print 1;": "(if a (print 1))",
            "if (a) print 1; else print 2;": "(if-else a (print 1) (print 2))",
            "while (a) a = a - 1;": "(while a (; (= a (- a 1))))",
            "fun f(a, b) { return a; }": "(fun f (a b) (return a))",
            "fun f() { return; }": "(fun f () (return))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, printed(case), case)

    def test_dangling_else_binds_nearest_if(self):
        self.assertEqual("(if a (if-else b (print 1) (print 2)))", printed("if (a) if (b) print 1; else print 2;"))

    def test_program_order(self):
        statements = parse(scan("var a = 1; print a; a = 2;"))
        self.assertEqual([ast.VarDecl, ast.Print, ast.ExpressionStmt], [type(stmt) for stmt in statements])

    def test_for_desugars_to_while(self):
        cases = {
            "for (var i = 0; i < 3; i = i + 1) print i;":
                "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))",
            "for (;;) print 1;": "(block (while true (print 1)))",
            "for (i = 0; i < 1;) print i;": "(block (; (= i 0)) (while (< i 1) (print i)))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, printed(case), case)

        for stmt in parse(scan("for (var i = 0; i < 3; i = i + 1) { print i; }")):
            self.assertIsInstance(stmt, ast.Block)
            self.assertIsInstance(stmt.statements[1], ast.While)

    def test_return_outside_function(self):
        errors = parse_errors("return 1;")
        self.assertEqual(["can't return from top-level code"], [error.msg for error in errors])

        errors = parse_errors("{ return; }")
        self.assertEqual(["can't return from top-level code"], [error.msg for error in errors])

        self.assertEqual([], parse_errors("fun f() { { return 1; } }"))
        self.assertEqual([], parse_errors("fun f() { fun g() { return 1; } return g; }"))

    def test_messages(self):
        cases = {
            "print 1": ("expected ; after value", ""),
            "var 1 = 2;": ("expected variable name", "1"),
            "(1 + 2;": ("expected ) after expression", ";"),
            "{ print 1;": ("expected } after block", ""),
            "f(1;": ("expected ) after arguments", ";"),
            "if 1) print 1;": ("expected ( after 'if'", "1"),
            "while (true print 1;": ("expected ) after condition", "print"),
            "1 +;": ("expected expression", ";"),
            "a = 1 2;": ("expected ; after statement", "2"),
            "fun (a) {}": ("expected function name", "("),
            "class A {}": ("expected expression", "class"),
        }
        for case, (message, where) in cases.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(scan(case))
            self.assertEqual(message, context.exception.msg, case)
            self.assertEqual(where, context.exception.where, case)

    def test_error_report(self):
        with self.assertRaises(ParseError) as context:
            parse(scan("var a = 1;\nprint (a;"))
        self.assertEqual("[line 2] error ;: expected ) after expression", context.exception.report())

        with self.assertRaises(ParseError) as context:
            parse(scan("print 1"))
        self.assertEqual("[line 1] error : expected ; after value", context.exception.report())


class RecoveryTestCase(unittest.TestCase):

    def test_resumes_after_malformed_statement(self):
        parser = Parser(scan("var = 1;\nprint 2;"))
        with self.assertRaises(ParseError) as context:
            parser.parse()
        self.assertEqual("expected variable name", context.exception.msg)
        self.assertEqual(1, len(parser.errors))

    def test_reports_one_error_per_statement(self):
        errors = parse_errors("print ;\nvar x = 1;\nprint (2;\nx = 3;\n1 = 2;")
        self.assertEqual([1, 3, 5], [error.line for error in errors])
        self.assertEqual(["expected expression", "expected ) after expression", "invalid assignment target"],
                         [error.msg for error in errors])

    def test_synchronizes_on_statement_keyword(self):
        # parsing resumes in front of print, so its own error is reported too
        errors = parse_errors("var a = 1 2 print (;")
        self.assertEqual(2, len(errors))
        self.assertEqual(("2", "expected ; after statement"), (errors[0].where, errors[0].msg))
        self.assertEqual((";", "expected expression"), (errors[1].where, errors[1].msg))

    def test_raises_first_error(self):
        parser = Parser(scan("print 1 print 2; 1 = 2;"))
        with self.assertRaises(ParseError) as context:
            parser.parse()
        self.assertIs(parser.errors[0], context.exception)

    def test_well_formed_program_has_no_errors(self):
        parser = Parser(scan("var a = 1; { print a; } fun f() { return a; }"))
        self.assertEqual(3, len(parser.parse()))
        self.assertEqual([], parser.errors)


if __name__ == '__main__':
    unittest.main()
