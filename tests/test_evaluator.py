"""
Tests for the evaluator.

Covers literal and identifier evaluation, statements, arithmetic semantics
(64-bit wrap, truncating division), runtime errors as values, and complete
programs run end to end.
"""

import pytest

from whereas.errors import EvaluationError, ParseErrorList
from whereas.evaluator import evaluate, run
from whereas.expressions import (
    BinaryOperator,
    BinaryPrefixExpr,
    Identifier,
    InfixExpr,
    InfixOperator,
    IntegerLiteral,
    PostfixExpr,
    PostfixOperator,
    StringLiteral,
    UnaryOperator,
    UnaryPrefixExpr,
)
from whereas.model import AssumeStmt, DeclStmt, IfStmt, PublishStmt, Relation, Resolution
from whereas.numerals import INT64_MAX, INT64_MIN
from whereas.values import Environment, Error, Integer, String


def publish(expr_source):
    """Run a one-line program publishing expr_source."""
    return run(f"title whereas resolved publish {expr_source}")


def evaluate_fresh(node):
    return evaluate(node, Environment())


def binary(op, a, b):
    return BinaryPrefixExpr(op, IntegerLiteral(a), IntegerLiteral(b))


class TestLiterals:
    """Test literal and identifier evaluation."""

    @pytest.mark.parametrize("value", [0, 1, 121001, -21, INT64_MIN, INT64_MAX])
    def test_integer(self, value):
        """Should evaluate integer literals to Integer values."""
        assert evaluate_fresh(IntegerLiteral(value)) == Integer(value)

    @pytest.mark.parametrize("text", ["", "WHEREAS", "zero (0)", "Greetings, Assembly."])
    def test_string(self, text):
        """Should evaluate string literals to String values."""
        assert evaluate_fresh(StringLiteral(text)) == String(text)

    def test_identifier_before_and_after_binding(self):
        """Should evaluate a name to None until it is bound."""
        env = Environment()
        assert evaluate(Identifier("Answer"), env) is None
        env.set("Answer", String("ok"))
        assert evaluate(Identifier("Answer"), env) == String("ok")


class TestStatements:
    """Test statement evaluation."""

    def test_declaration_binds(self):
        """Should bind a declared name to its value."""
        env = Environment()
        decl = DeclStmt(Identifier("Answer"), IntegerLiteral(42))
        assert evaluate(decl, env) is None
        assert evaluate(Identifier("Answer"), env) == Integer(42)

    def test_assume_rebinds(self):
        """Should rebind a name on reassignment."""
        env = Environment()
        env.set("Stock", Integer(99))
        evaluate(AssumeStmt(Identifier("Stock"), IntegerLiteral(0)), env)
        assert env.get("Stock") == Integer(0)

    def test_publish_emits_inspection(self):
        """Should emit the inspected form of a published value."""
        lines = []
        evaluate(PublishStmt(IntegerLiteral(-1)), Environment(), lines.append)
        assert lines == ["negative one (-1)"]

    def test_publish_without_emit(self):
        """Should publish nothing when no emit callback is given."""
        assert evaluate(PublishStmt(StringLiteral("quiet")), Environment()) is None

    def test_error_is_not_bound(self):
        """Should return an Error value instead of binding it."""
        env = Environment()
        result = evaluate(DeclStmt(Identifier("Bad"), binary(BinaryOperator.QUOTIENT, 1, 0)), env)
        assert isinstance(result, Error)
        assert "Bad" not in env

    @pytest.mark.parametrize("left,right,relation,holds", [
        (IntegerLiteral(5), IntegerLiteral(3), Relation.EXCEEDS, True),
        (IntegerLiteral(3), IntegerLiteral(3), Relation.EXCEEDS, False),
        (IntegerLiteral(3), IntegerLiteral(3), Relation.EQUALS, True),
        (StringLiteral("a"), StringLiteral("a"), Relation.EQUALS, True),
        (StringLiteral("3"), IntegerLiteral(3), Relation.EQUALS, False),
    ])
    def test_if(self, left, right, relation, holds):
        """Should run the consequence only when the relation holds."""
        lines = []
        stmt = IfStmt(left, right, relation, PublishStmt(StringLiteral("yes")))
        assert evaluate(stmt, Environment(), lines.append) is None
        assert lines == (["yes"] if holds else [])

    def test_exceeds_type_mismatch(self):
        """Should return an Error when exceeds compares a non-integer."""
        stmt = IfStmt(
            StringLiteral("a"), IntegerLiteral(1), Relation.EXCEEDS,
            PublishStmt(StringLiteral("never")),
        )
        assert evaluate_fresh(stmt) == Error("type mismatch: STRING exceeds INTEGER")

    def test_unknown_node(self):
        """Should raise TypeError for an object that is not a node."""
        with pytest.raises(TypeError):
            evaluate_fresh("not a node")


class TestArithmetic:
    """Test operator semantics on integers."""

    @pytest.mark.parametrize("source,expected", [
        ("twice three (3)", "six (6)"),
        ("thrice four (4)", "twelve (12)"),
        ("sum one (1) one (1)", "two (2)"),
        ("product two (2) three (3)", "six (6)"),
        ("quotient twelve (12) five (5)", "two (2)"),
        ("remainder twelve (12) five (5)", "two (2)"),
        ("three (3) less two (2)", "one (1)"),
        ("two (2) less three (3)", "negative one (-1)"),
        ("three (3) squared", "nine (9)"),
        ("four (4) cubed", "sixty-four (64)"),
        ("ten (10) less thrice four (4)", "negative two (-2)"),
        ("product three (3) less two (2) four (4)", "four (4)"),
        ("twice three (3) squared", "eighteen (18)"),
        ("three (3) squared less two (2) cubed", "one (1)"),
    ])
    def test_operators(self, source, expected):
        """Should apply each operator to integers."""
        assert publish(source) == [expected]

    @pytest.mark.parametrize("op,a,b,expected", [
        (BinaryOperator.QUOTIENT, -7, 2, -3),
        (BinaryOperator.QUOTIENT, 7, -2, -3),
        (BinaryOperator.QUOTIENT, -7, -2, 3),
        (BinaryOperator.REMAINDER, -7, 2, -1),
        (BinaryOperator.REMAINDER, 7, -2, 1),
        (BinaryOperator.REMAINDER, -7, -2, -1),
    ])
    def test_division_truncates_toward_zero(self, op, a, b, expected):
        """Should truncate quotients toward zero and sign remainders by the dividend."""
        assert evaluate_fresh(binary(op, a, b)) == Integer(expected)

    def test_results_wrap_to_64_bits(self):
        """Should wrap results to signed 64 bits."""
        assert evaluate_fresh(binary(BinaryOperator.SUM, INT64_MAX, 1)) == Integer(INT64_MIN)
        assert evaluate_fresh(binary(BinaryOperator.PRODUCT, INT64_MAX, 2)) == Integer(-2)
        assert evaluate_fresh(
            UnaryPrefixExpr(UnaryOperator.DOUBLE, IntegerLiteral(INT64_MIN))
        ) == Integer(0)
        assert evaluate_fresh(
            InfixExpr(InfixOperator.SUBTRACT, IntegerLiteral(INT64_MIN), IntegerLiteral(1))
        ) == Integer(INT64_MAX)
        assert evaluate_fresh(binary(BinaryOperator.QUOTIENT, INT64_MIN, -1)) == Integer(INT64_MIN)

    @pytest.mark.parametrize("op", [BinaryOperator.QUOTIENT, BinaryOperator.REMAINDER])
    def test_division_by_zero(self, op):
        """Should return an Error for a zero divisor."""
        result = evaluate_fresh(binary(op, 1, 0))
        assert result == Error(f"division by zero: {op.value} 1 0")


class TestRuntimeErrors:
    """Test that runtime failures are values that stop evaluation."""

    def test_non_numeric_operand(self):
        """Should return an Error for a string operand."""
        expr = UnaryPrefixExpr(UnaryOperator.DOUBLE, StringLiteral("x"))
        assert evaluate_fresh(expr) == Error("non-numeric x in numeric context")

    def test_non_numeric_in_each_position(self):
        """Should return an Error for a string in any operand position."""
        string = StringLiteral("s")
        for expr in (
            BinaryPrefixExpr(BinaryOperator.SUM, string, IntegerLiteral(1)),
            BinaryPrefixExpr(BinaryOperator.SUM, IntegerLiteral(1), string),
            InfixExpr(InfixOperator.SUBTRACT, string, IntegerLiteral(1)),
            PostfixExpr(PostfixOperator.SQUARE, string),
        ):
            assert evaluate_fresh(expr) == Error("non-numeric s in numeric context")

    def test_missing_value(self):
        """Should return an Error for an unbound operand."""
        expr = PostfixExpr(PostfixOperator.CUBE, Identifier("Unbound"))
        assert evaluate_fresh(expr) == Error("missing value in numeric context")

    def test_error_propagates_outward(self):
        """Should pass an inner Error through enclosing operators."""
        inner = binary(BinaryOperator.QUOTIENT, 1, 0)
        expr = UnaryPrefixExpr(UnaryOperator.TRIPLE, PostfixExpr(PostfixOperator.SQUARE, inner))
        assert evaluate_fresh(expr) == Error("division by zero: quotient 1 0")

    def test_error_stops_resolution(self):
        """Should stop the resolution at the first Error."""
        lines = []
        resolution = Resolution(
            resolved_stmts=(
                PublishStmt(StringLiteral("before")),
                PublishStmt(binary(BinaryOperator.REMAINDER, 1, 0)),
                PublishStmt(StringLiteral("after")),
            ),
        )
        result = evaluate(resolution, Environment(), lines.append)
        assert isinstance(result, Error)
        assert lines == ["before"]

    def test_run_raises_evaluation_error(self):
        """Should raise EvaluationError from run."""
        with pytest.raises(EvaluationError) as exc_info:
            publish('twice "Hello"')
        assert exc_info.value.error == Error("non-numeric Hello in numeric context")
        assert exc_info.value.message == "non-numeric Hello in numeric context"


class TestRun:
    """Test complete programs."""

    def test_hello_world(self):
        """Should publish a string literal."""
        assert run('title whereas resolved publish "Hello, World!"') == ["Hello, World!"]

    def test_declared_greeting(self):
        """Should publish a declared value."""
        source = (
            'title whereas the Customary Greeting (hereinafter Greeting) is "Hello, World!" '
            "resolved publish Greeting"
        )
        assert run(source) == ["Hello, World!"]

    def test_reassignment(self):
        """Should publish a reassigned value."""
        source = (
            "title whereas the Stock (hereinafter Stock) is ten (10) "
            "resolved Stock assume Stock squared "
            "resolved publish Stock"
        )
        assert run(source) == ["one hundred (100)"]

    def test_emit_called_as_lines_are_published(self):
        """Should call emit for each line and return them all."""
        seen = []
        lines = run('title whereas resolved publish "a" resolved publish "b"', emit=seen.append)
        assert seen == lines == ["a", "b"]

    def test_parse_errors_propagate(self):
        """Should raise parse errors before running."""
        with pytest.raises(ParseErrorList):
            run("title whereas the Stock (hereinafter Stock) is one (1) resolved")

    def test_output_before_runtime_error(self):
        """Should emit the lines published before a runtime error."""
        seen = []
        source = 'title whereas resolved publish "first" resolved publish quotient one (1) zero (0)'
        with pytest.raises(EvaluationError):
            run(source, emit=seen.append)
        assert seen == ["first"]
