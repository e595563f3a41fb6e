"""Tests for the expression syntax analyzers.

Tests cover:
- ParenAnalyzer: function presence and parenthesis balance/order
- QuoteAnalyzer: quote style, pairing and placement
- OperatorAnalyzer: operator shape and placement between functions
- NegativeNumberAnalyzer: unquoted negative arguments
- validate_syntax: ordering and short-circuiting
"""

from branchvalidator.expressions import (
    NegativeNumberAnalyzer,
    OperatorAnalyzer,
    ParenAnalyzer,
    QuoteAnalyzer,
    ValidationOutcome,
    validate_syntax,
)


# =============================================================================
# Paren Analyzer Tests
# =============================================================================


class TestParenAnalyzer:
    """Tests for the parenthesis analyzer."""

    def setup_method(self):
        self.analyzer = ParenAnalyzer()

    def test_valid_expressions(self):
        assert self.analyzer.analyze("funA()").valid
        assert self.analyzer.analyze("funA(123)").valid
        assert self.analyzer.analyze("funA('value')").valid
        assert self.analyzer.analyze('funB("value")').valid
        assert self.analyzer.analyze("even-(number)-of-parens").valid

    def test_valid_outcome_has_empty_message(self):
        assert self.analyzer.analyze("funA()") == ValidationOutcome(True, "")

    def test_null_or_empty_expression(self):
        for expression in (None, ""):
            outcome = self.analyzer.analyze(expression)
            assert not outcome.valid
            assert outcome.message == "The expression must have at least one function."

    def test_no_parens(self):
        outcome = self.analyzer.analyze("no-functions-exist")
        assert outcome.message == "The expression must have at least one function."

    def test_cannot_start_with_paren(self):
        expected = "The expression cannot start with a '(' or ')' parenthesis."
        assert self.analyzer.analyze("(start-with-left-paren").message == expected
        assert self.analyzer.analyze(")start-with-right-paren").message == expected
        assert self.analyzer.analyze("(8)").message == expected

    def test_cannot_end_with_left_paren(self):
        outcome = self.analyzer.analyze("ends-with-left-paren(")
        assert outcome.message == "The expression cannot end with a '('."

    def test_missing_left_paren(self):
        assert self.analyzer.analyze("myFunc)").message == "The expression is missing a '('."
        assert self.analyzer.analyze("equalTo(8))").message == "The expression is missing a '('."

    def test_missing_right_paren(self):
        assert self.analyzer.analyze("func1( && func2()").message == (
            "The expression is missing a ')'."
        )
        assert self.analyzer.analyze("equalTo((8)").message == (
            "The expression is missing a ')'."
        )

    def test_right_paren_before_left_paren(self):
        outcome = self.analyzer.analyze("func3)( && func4()")
        assert outcome.message == "A function parameter list cannot start with a ')'."


# =============================================================================
# Quote Analyzer Tests
# =============================================================================


class TestQuoteAnalyzer:
    """Tests for the quote analyzer."""

    def setup_method(self):
        self.analyzer = QuoteAnalyzer()

    def test_no_quotes_is_valid(self):
        assert self.analyzer.analyze(None).valid
        assert self.analyzer.analyze("").valid
        assert self.analyzer.analyze("funA(123)").valid

    def test_paired_quotes_inside_arguments(self):
        assert self.analyzer.analyze("funA('value')").valid
        assert self.analyzer.analyze('funA("value")').valid
        assert self.analyzer.analyze("funA('a') && funB('b', 'c')").valid

    def test_mixed_quote_styles(self):
        outcome = self.analyzer.analyze("funA(\"'both'\")")
        assert outcome.message == "Cannot use both single and double quotes in an expression."

    def test_odd_single_quotes(self):
        assert self.analyzer.analyze("funA('value)").message == (
            "Expression missing a single quote."
        )

    def test_odd_double_quotes(self):
        assert self.analyzer.analyze('funA("value)').message == (
            "Expression missing a double quote."
        )

    def test_quotes_outside_argument_list(self):
        expected = "Single and double quotes must only exist inside of a function argument list."
        assert self.analyzer.analyze("fun'A(value')").message == expected
        assert self.analyzer.analyze('fun"A(value")').message == expected
        assert self.analyzer.analyze("funA() && 'x' && funB()").message == expected


# =============================================================================
# Operator Analyzer Tests
# =============================================================================


class TestOperatorAnalyzer:
    """Tests for the operator analyzer."""

    def setup_method(self):
        self.analyzer = OperatorAnalyzer()

    def test_valid_expressions(self):
        assert self.analyzer.analyze(None).valid
        assert self.analyzer.analyze("").valid
        assert self.analyzer.analyze("stuff").valid
        assert self.analyzer.analyze("funA()").valid
        assert self.analyzer.analyze("funA() && funB() && funC()").valid
        assert self.analyzer.analyze("funA() || funB() || funC()").valid
        assert self.analyzer.analyze("funA() && funB() || funC()").valid

    def test_functions_without_operators(self):
        expected = "Expression functions must be separated by '&&' or '||' operators."
        assert self.analyzer.analyze("funA()funB()").message == expected
        assert self.analyzer.analyze("funA() funB()").message == expected

    def test_start_or_end_with_and(self):
        expected = (
            "Cannot start or end an expression with an '&&' operator or '&' character."
        )
        assert self.analyzer.analyze("&&funA()()").message == expected
        assert self.analyzer.analyze("&funA()()").message == expected
        assert self.analyzer.analyze("funA()()&&").message == expected
        assert self.analyzer.analyze("funA()()&").message == expected
        assert self.analyzer.analyze(" &&funA()()").message == expected
        assert self.analyzer.analyze("funA()()&& ").message == expected

    def test_start_or_end_with_or(self):
        expected = (
            "Cannot start or end an expression with an '||' operator or '|' character."
        )
        assert self.analyzer.analyze("||funA()()").message == expected
        assert self.analyzer.analyze("funA()()||").message == expected
        assert self.analyzer.analyze("|funA()()").message == expected
        assert self.analyzer.analyze("funA()()|").message == expected

    def test_odd_operator_characters(self):
        assert self.analyzer.analyze("funA() || funB() | funC()").message == (
            "Expression is missing an '|' operator."
        )
        assert self.analyzer.analyze("funA() && funB() & funC()").message == (
            "Expression is missing an '&' operator."
        )

    def test_single_character_operators(self):
        assert self.analyzer.analyze(
            "funA() | funB() | funC() | funD() | funE()"
        ).message == "OR operators must be 2 consecutive '|' symbols."
        assert self.analyzer.analyze(
            "funA() & funB() & funC() & funD() & funE()"
        ).message == "AND operators must be 2 consecutive '&' symbols."

    def test_operators_longer_than_two_characters(self):
        assert self.analyzer.analyze("funA() |||| funB()").message == (
            "OR operators must be 2 consecutive '|' symbols."
        )
        assert self.analyzer.analyze("funA() &&&& funB()").message == (
            "AND operators must be 2 consecutive '&' symbols."
        )

    def test_mixed_operator_run(self):
        outcome = self.analyzer.analyze("funA() &||& funB()")
        assert not outcome.valid
        assert "'&||&'" in outcome.message

    def test_missing_operator_between_functions(self):
        expected = "Expression functions must be separated by '&&' or '||' operators."
        assert self.analyzer.analyze("funA() && funB() funC()").message == expected
        assert self.analyzer.analyze("funA() funB() && funC()").message == expected
        assert self.analyzer.analyze("funA() && funB() funC(").message == expected
        assert self.analyzer.analyze("funA() || funB() funC()").message == expected
        assert self.analyzer.analyze("funA() funB() || funC()").message == expected


# =============================================================================
# Negative Number Analyzer Tests
# =============================================================================


class TestNegativeNumberAnalyzer:
    """Tests for the negative number analyzer."""

    def setup_method(self):
        self.analyzer = NegativeNumberAnalyzer()

    def test_valid_arguments(self):
        assert self.analyzer.analyze("funA(10)").valid
        assert self.analyzer.analyze("funA('-30')").valid
        assert self.analyzer.analyze("funA('str-value')").valid
        assert self.analyzer.analyze('funA("value2")').valid
        assert self.analyzer.analyze("funA(40, 50)").valid
        assert self.analyzer.analyze("funA()").valid
        assert self.analyzer.analyze("funA(110,)").valid

    def test_negative_arguments(self):
        expected = "Negative number argument values are not allowed."
        assert self.analyzer.analyze("funA(-20)").message == expected
        assert self.analyzer.analyze("funA(10-0)").message == expected
        assert self.analyzer.analyze("funA(-60, 70)").message == expected
        assert self.analyzer.analyze("funA(80, -90)").message == expected

    def test_negative_argument_in_later_function(self):
        outcome = self.analyzer.analyze("funA('a-b') && funB(1) || funC(2, -3)")
        assert outcome.message == "Negative number argument values are not allowed."


# =============================================================================
# validate_syntax Tests
# =============================================================================


class TestValidateSyntax:
    """Tests for the aggregate syntax validator."""

    def test_single_function_is_valid(self):
        assert validate_syntax("equalTo('main')") == ValidationOutcome.ok()
        assert validate_syntax("isCharNum(8)").valid
        assert validate_syntax("allUpperCase()").valid

    def test_expression_is_trimmed(self):
        assert validate_syntax("   equalTo('main')   ").valid
        assert validate_syntax("  (equalTo('main')").message == (
            "The expression cannot start with a '(' or ')' parenthesis."
        )

    def test_leading_or_trailing_parens_fail(self):
        assert not validate_syntax("(equalTo('main')").valid
        assert not validate_syntax(")equalTo('main')").valid
        assert not validate_syntax("equalTo('main')(").valid

    def test_first_failure_wins(self):
        # Fails both the paren and the negative number checks
        outcome = validate_syntax("equalTo(-8")
        assert outcome.message == "The expression is missing a ')'."

    def test_negative_number_reported(self):
        assert validate_syntax("equalTo(-8)").message == (
            "Negative number argument values are not allowed."
        )

    def test_operator_expression(self):
        assert validate_syntax(
            "startsWith('feature/') || startsWith('preview') && isCharNum(8)"
        ).valid

    def test_unknown_function_passes_syntax(self):
        # Name checks belong to the signature analyzer
        assert validate_syntax("notAFunction('x')").valid
