"""
Calculator Handler - Inline math results in search.

Fires on any query that looks like arithmetic ("3+4*2", "(1+2)/3").
Picking the result copies the value to the clipboard.
"""

from typing import Optional

from quicksearch.search.expression import ExpressionEvaluator, make_evaluator
from quicksearch.search.result import ResultItem, ResultType


class CalculatorHandler:
    """Turn an evaluable query into a single calculator result."""

    name = "calculator"
    category = "Calculator"

    def __init__(self, evaluator: Optional[ExpressionEvaluator] = None):
        self.evaluator = evaluator or make_evaluator()

    def matches(self, query: str) -> bool:
        return self.evaluator.evaluate(query) is not None

    def get_results(self, query: str) -> list[ResultItem]:
        value = self.evaluator.evaluate(query)
        if value is None:
            return []

        expr = query.strip()
        return [ResultItem(
            id="calculator-result",
            type=ResultType.CALCULATOR,
            title=value,
            description=f"= {expr}",
            icon="🧮",
            metadata={
                "action": "copy-result",
                "value": value,
                "expression": expr,
            },
        )]
