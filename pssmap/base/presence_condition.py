"""
Presence conditions of build and code artifacts.

Conditions are pyeda expressions. Textual conditions may use the C
preprocessor style operators ``&&``, ``||`` and ``!`` as well as
``defined(X)``/``defined X``, which are rewritten to the pyeda syntax before
parsing.
"""
import re
import typing as tp

from pyeda.inter import Expression, expr  # type: ignore
from pyeda.parsing.boolexpr import Error as BoolExprError  # type: ignore

from pssmap.utils.exceptions import MalformedConditionError

DEFINED_FORMAT = re.compile(
    r"\bdefined\s*\(\s*(?P<name>[A-Za-z_]\w*)\s*\)|"
    r"\bdefined\s+(?P<plain_name>[A-Za-z_]\w*)"
)

OPERATOR_REWRITES = [
    (re.compile(r"&&"), "&"),
    (re.compile(r"\|\|"), "|"),
    (re.compile(r"!(?!=)"), "~"),
    (re.compile(r"\btrue\b"), "1"),
    (re.compile(r"\bfalse\b"), "0"),
]


def __rewrite_defined(match: tp.Match[str]) -> str:
    return match.group("name") or match.group("plain_name")


def normalize_condition(condition: str) -> str:
    """
    Rewrite a C preprocessor style condition into pyeda syntax.

    Args:
        condition: the textual condition, e.g., ``defined(A) && !B``

    Returns:
        the condition in pyeda syntax, e.g., ``A & ~B``
    """
    normalized = DEFINED_FORMAT.sub(__rewrite_defined, condition)
    for pattern, replacement in OPERATOR_REWRITES:
        normalized = pattern.sub(replacement, normalized)
    return normalized.strip()


def parse_condition(condition: str) -> Expression:
    """
    Parse a textual presence condition.

    The expression is not simplified, so every variable mentioned in the
    text stays part of it.

    Args:
        condition: the textual condition

    Returns:
        the parsed pyeda expression
    """
    normalized = normalize_condition(condition)
    if not normalized:
        raise MalformedConditionError(condition, "empty expression")

    try:
        return expr(normalized, simplify=False)
    except BoolExprError as err:
        raise MalformedConditionError(condition, str(err)) from err


def parse_optional_condition(
    condition: tp.Optional[tp.Any]
) -> tp.Optional[Expression]:
    """
    Parse a condition taken from a yaml document, where a missing value means
    the artifact is unconditional.

    Boolean yaml values are mapped to the corresponding constants.

    Args:
        condition: the raw condition or ``None``

    Returns:
        the parsed expression, or ``None`` if no condition was given
    """
    if condition is None:
        return None
    if isinstance(condition, bool):
        return expr(condition)
    return parse_condition(str(condition))


def get_variable_names(condition: Expression) -> tp.Set[str]:
    """
    Names of all variables a condition references.

    Args:
        condition: the presence condition

    Returns:
        the set of distinct variable names, empty for constant conditions
    """
    return {str(variable) for variable in condition.support}
