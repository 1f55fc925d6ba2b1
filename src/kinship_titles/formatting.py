"""Display helpers for chain text.

The resolver works on the canonical single-character 夫; people read and
type the two-character 丈夫. These helpers convert for display only and
never affect resolution.
"""
from __future__ import annotations

from .resolver import canonicalize, tokenize
from .vocabulary import CONNECTIVE, HUSBAND_SYNONYM, ElementaryRelation


def _display_token(relation: ElementaryRelation) -> str:
    return HUSBAND_SYNONYM if relation == ElementaryRelation.HUSBAND else relation.value


def format_chain(text: str) -> str:
    """Re-render chain text as its recognized tokens joined by 的.

    >>> format_chain("丈夫 父")
    '丈夫的父'
    """
    return CONNECTIVE.join(_display_token(r) for r in tokenize(canonicalize(text)))


def display_input(text: str) -> str:
    """Show every 夫 as 丈夫 without doubling an existing 丈夫."""
    husband = ElementaryRelation.HUSBAND.value
    return HUSBAND_SYNONYM.join(part.replace(husband, HUSBAND_SYNONYM) for part in text.split(HUSBAND_SYNONYM))
