"""Feed conditional logic"""
from typing import Optional

from helpdesk_bridge.models.forms import ConditionRule, FeedCondition, Submission
from helpdesk_bridge.services.field_extractor import FieldExtractor


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def rule_matches(rule: ConditionRule, actual: str) -> bool:
    """Compare a field value against a rule; text comparisons ignore case"""
    operator = rule.operator

    if operator in ("greater_than", "less_than"):
        left, right = _to_float(actual), _to_float(rule.value)
        if left is None or right is None:
            return False
        return left > right if operator == "greater_than" else left < right

    actual = (actual or "").strip().lower()
    expected = (rule.value or "").strip().lower()

    if operator == "is":
        return actual == expected
    if operator == "isnot":
        return actual != expected
    if operator == "contains":
        return expected in actual
    if operator == "starts_with":
        return actual.startswith(expected)
    if operator == "ends_with":
        return actual.endswith(expected)
    return False


def is_condition_met(
    condition: Optional[FeedCondition],
    submission: Submission,
    extractor: FieldExtractor,
) -> bool:
    """Disabled or empty conditions always pass"""
    if condition is None or not condition.enabled or not condition.rules:
        return True

    results = (
        rule_matches(rule, extractor.extract(submission, rule.field_ref))
        for rule in condition.rules
    )
    if condition.logic_type == "any":
        return any(results)
    return all(results)
