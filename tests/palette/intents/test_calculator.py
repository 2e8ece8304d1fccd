from __future__ import annotations

import pytest

from toorker.palette.intents.calculator import (
    CalculationError,
    CalculationMatcher,
    format_number,
    parse,
    raw_number,
    safe_calculate,
    tokenize,
)


@pytest.fixture
def matcher() -> CalculationMatcher:
    return CalculationMatcher()


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("= 2+3*4", "14"),
        ("20% of 500", "100"),
        ("sqrt(16)", "4"),
        ("calc (1 + 2) * 3", "9"),
        ("calculate 10 / 4", "2.5"),
        ("= -2^2", "-4"),
        ("= 2^3^2", "512"),
        ("10 % 3", "1"),
        ("50%", "0.5"),
        ("= max(1, 7, 3)", "7"),
        ("= round(2.5)", "3"),
        ("= round(-2.5)", "-2"),
        ("6 × 7", "42"),
        ("= 2 * pi - tau", "0"),
        ("= 1.5e3 + 1", "1501"),
    ],
)
def test_calculation_results(matcher, services, query: str, expected: str) -> None:
    actions = matcher.match(query, services)

    assert actions is not None
    assert actions[0].id == "smart-calc"
    assert actions[0].result == expected


def test_label_uses_grouped_digits(matcher, services) -> None:
    actions = matcher.match("= 1000 * 1000", services)

    assert actions is not None
    assert actions[0].label == "= 1,000,000"
    assert actions[0].description == "1000 * 1000 = 1000000"
    assert actions[0].result == "1000000"


@pytest.mark.parametrize(
    "query",
    [
        "= window",
        "= eval(1)",
        "= __import__('os')",
        "= 1/0",
        "= 2 +",
        "= sqrt(-1)",
        "= 1e400",
        "= 01 + 1",
        "2024-01-01",
        "192.168.1.1",
        "12345",
        "1,000",
        "hello world",
        "pi",
    ],
)
def test_rejected_inputs_yield_no_action(matcher, services, query: str) -> None:
    assert matcher.match(query, services) is None


def test_percent_before_operand_is_modulo() -> None:
    assert safe_calculate("7 % 4") == 3
    assert safe_calculate("7%") == pytest.approx(0.07)


def test_unknown_characters_fail_tokenizing() -> None:
    with pytest.raises(CalculationError):
        tokenize("2 $ 3")


def test_function_arity_is_checked() -> None:
    with pytest.raises(CalculationError):
        parse("pow(2)")
    with pytest.raises(CalculationError):
        parse("sqrt(1, 2)")


def test_number_formatting() -> None:
    assert format_number(1234567.0) == "1,234,567"
    assert format_number(0.1 + 0.2) == "0.3"
    assert raw_number(0.1 + 0.2) == "0.3"
    assert raw_number(-4.0) == "-4"
