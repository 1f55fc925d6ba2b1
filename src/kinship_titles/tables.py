"""Static title data: the override table and the arithmetic title table.

Both tables are built once at import time and exposed as read-only mappings.

OVERRIDES maps literal chain text to a title and wins over every other
strategy. TITLE_TABLE maps the folded (generation, gender, last relation)
key of a chain to a title and is only consulted when graph traversal fails.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .errors import (
    EMPTY_INPUT_SENTINEL,
    INTERNAL_ERROR_SENTINEL,
    UNKNOWN_RELATION_SENTINEL,
    UNRECOGNIZED_SENTINEL,
    NoTitleMapping,
)
from .vocabulary import HUSBAND_SYNONYM, WIFE_SYNONYM, ElementaryRelation, Gender

R = ElementaryRelation
M = Gender.MALE
F = Gender.FEMALE

TitleKey = tuple[int, Gender, ElementaryRelation]

__all__ = [
    "EMPTY_INPUT_SENTINEL",
    "INTERNAL_ERROR_SENTINEL",
    "OVERRIDES",
    "TITLE_TABLE",
    "UNKNOWN_RELATION_SENTINEL",
    "UNRECOGNIZED_SENTINEL",
    "generic_title",
    "lookup_title",
]


# =============================================================================
# Override table
# =============================================================================

_OVERRIDE_ENTRIES: dict[str, str] = {
    # Wife's immediate family
    "妻子的父": "岳父",
    "妻子的母": "岳母",
    "妻子的兄": "大舅子",
    "妻子的弟": "小舅子",
    "妻子的姐": "大姨子",
    "妻子的妹": "小姨子",
    "妻子的子": "继子",
    "妻子的女": "继女",
    # Wife's father's side
    "妻子的父的子": "大舅子/小舅子",
    "妻子的父的兄": "岳伯父",
    "妻子的父的弟": "岳叔父",
    "妻子的父的姐": "岳姑妈",
    "妻子的父的妹": "岳姑妈",
    # Wife's mother's side
    "妻子的母的子": "大舅子/小舅子",
    "妻子的母的兄": "岳舅父",
    "妻子的母的弟": "岳舅父",
    "妻子的母的姐": "岳姨妈",
    "妻子的母的妹": "岳姨妈",
    # Spouses of wife's siblings
    "妻子的兄的妻": "大舅嫂",
    "妻子的弟的妻": "小舅嫂",
    "妻子的姐的夫": "大姨夫",
    "妻子的妹的夫": "小姨夫",
    # Children of wife's siblings
    "妻子的兄的子": "内侄",
    "妻子的弟的子": "内侄",
    "妻子的兄的女": "内侄女",
    "妻子的弟的女": "内侄女",
    "妻子的姐的子": "外甥",
    "妻子的妹的子": "外甥",
    "妻子的姐的女": "外甥女",
    "妻子的妹的女": "外甥女",
    # Husband's immediate family
    "丈夫的父": "公公",
    "丈夫的母": "婆婆",
    "丈夫的兄": "大伯",
    "丈夫的弟": "小叔",
    "丈夫的姐": "大姑",
    "丈夫的妹": "小姑",
    "丈夫的子": "继子",
    "丈夫的女": "继女",
    # Husband's father's side
    "丈夫的父的兄": "伯公",
    "丈夫的父的弟": "叔公",
    "丈夫的父的姐": "姑婆",
    "丈夫的父的妹": "姑婆",
    # Husband's mother's side
    "丈夫的母的兄": "舅公",
    "丈夫的母的弟": "舅公",
    "丈夫的母的姐": "姨婆",
    "丈夫的母的妹": "姨婆",
    # Spouses of husband's siblings
    "丈夫的兄的妻": "大伯母",
    "丈夫的弟的妻": "小婶",
    "丈夫的姐的夫": "大姑父",
    "丈夫的妹的夫": "小姑父",
    # Children of husband's siblings
    "丈夫的兄的子": "侄子",
    "丈夫的弟的子": "侄子",
    "丈夫的兄的女": "侄女",
    "丈夫的弟的女": "侄女",
    "丈夫的姐的子": "外甥",
    "丈夫的妹的子": "外甥",
    "丈夫的姐的女": "外甥女",
    "丈夫的妹的女": "外甥女",
    # Father's side
    "父的父": "爷爷",
    "父的母": "奶奶",
    "父的丈夫": "父亲",
    "父的夫": "父亲",
    "父的妻": "母亲",
    "父的兄": "伯父",
    "父的弟": "叔父",
    "父的姐": "姑妈",
    "父的妹": "姑妈",
    "父的子": "哥哥/弟弟",
    "父的女": "姐姐/妹妹",
    "父的兄的妻": "伯母",
    "父的弟的妻": "婶婶",
    "父的姐的夫": "姑父",
    "父的妹的夫": "姑父",
    "父的兄的子": "堂兄/堂弟",
    "父的弟的子": "堂兄/堂弟",
    "父的兄的女": "堂姐/堂妹",
    "父的弟的女": "堂姐/堂妹",
    "父的姐的子": "表兄/表弟",
    "父的妹的子": "表兄/表弟",
    "父的姐的女": "表姐/表妹",
    "父的妹的女": "表姐/表妹",
    # Mother's side
    "母的父": "外公",
    "母的母": "外婆",
    "母的丈夫": "父亲",
    "母的夫": "父亲",
    "母的妻": "母亲",
    "母的兄": "舅舅",
    "母的弟": "舅舅",
    "母的姐": "姨妈",
    "母的妹": "姨妈",
    "母的子": "哥哥/弟弟",
    "母的女": "姐姐/妹妹",
    "母的兄的妻": "舅母",
    "母的弟的妻": "舅母",
    "母的姐的夫": "姨父",
    "母的妹的夫": "姨父",
    "母的兄的子": "表兄/表弟",
    "母的弟的子": "表兄/表弟",
    "母的兄的女": "表姐/表妹",
    "母的弟的女": "表姐/表妹",
    "母的姐的子": "表兄/表弟",
    "母的妹的子": "表兄/表弟",
    "母的姐的女": "表姐/表妹",
    "母的妹的女": "表姐/表妹",
    # Siblings' spouses
    "兄的妻": "嫂子",
    "弟的妻": "弟媳",
    "兄的丈夫": "兄夫",
    "弟的丈夫": "弟夫",
    "姐的夫": "姐夫",
    "妹的夫": "妹夫",
    "姐的妻": "姐妻",
    "妹的妻": "妹妻",
    # Siblings' children
    "兄的子": "侄子",
    "弟的子": "侄子",
    "兄的女": "侄女",
    "弟的女": "侄女",
    "姐的子": "外甥",
    "妹的子": "外甥",
    "姐的女": "外甥女",
    "妹的女": "外甥女",
    # Spouses of siblings' children
    "兄的子的妻": "侄媳",
    "弟的子的妻": "侄媳",
    "兄的女的夫": "侄女婿",
    "弟的女的夫": "侄女婿",
    "姐的子的妻": "外甥媳",
    "妹的子的妻": "外甥媳",
    "姐的女的夫": "外甥女婿",
    "妹的女的夫": "外甥女婿",
    # Children's spouses and children
    "子的妻": "儿媳",
    "女的夫": "女婿",
    "子的子": "孙子",
    "子的女": "孙女",
    "女的子": "外孙",
    "女的女": "外孙女",
    "子的子的妻": "孙媳",
    "子的女的夫": "孙女婿",
    "女的子的妻": "外孙媳",
    "女的女的夫": "外孙女婿",
    # Great-grandparents
    "父的父的父": "太爷爷",
    "父的父的母": "太奶奶",
    "父的母的父": "太爷爷",
    "父的母的母": "太奶奶",
    "母的父的父": "太外公",
    "母的父的母": "太外婆",
    "母的母的父": "太外公",
    "母的母的母": "太外婆",
}


def _with_keypad_aliases(entries: Mapping[str, str]) -> dict[str, str]:
    """Add single-character spellings for keys written with 丈夫 or 妻子.

    An explicitly listed key always wins over a derived alias.
    """
    table = dict(entries)
    for key, title in entries.items():
        alias = key.replace(HUSBAND_SYNONYM, R.HUSBAND.value).replace(WIFE_SYNONYM, R.WIFE.value)
        if alias != key:
            table.setdefault(alias, title)
    return table


OVERRIDES: Mapping[str, str] = MappingProxyType(_with_keypad_aliases(_OVERRIDE_ENTRIES))


# =============================================================================
# Title table
# =============================================================================

TITLE_TABLE: Mapping[TitleKey, str] = MappingProxyType({
    # Elders, male
    (2, M, R.FATHER): "太爷爷",
    (2, M, R.MOTHER): "太外公",
    (1, M, R.FATHER): "爷爷",
    (1, M, R.MOTHER): "外公",
    (1, M, R.ELDER_BROTHER): "伯父",
    (1, M, R.YOUNGER_BROTHER): "叔父",
    (1, M, R.ELDER_SISTER): "姑父",
    (1, M, R.YOUNGER_SISTER): "姑父",
    (1, M, R.SON): "父亲",
    (1, M, R.DAUGHTER): "父亲",
    (1, M, R.HUSBAND): "公公",
    (1, M, R.WIFE): "岳父",
    # Elders, female
    (2, F, R.FATHER): "太奶奶",
    (2, F, R.MOTHER): "太外婆",
    (1, F, R.FATHER): "奶奶",
    (1, F, R.MOTHER): "外婆",
    (1, F, R.ELDER_BROTHER): "伯母",
    (1, F, R.YOUNGER_BROTHER): "婶婶",
    (1, F, R.ELDER_SISTER): "姑妈",
    (1, F, R.YOUNGER_SISTER): "姑妈",
    (1, F, R.SON): "母亲",
    (1, F, R.DAUGHTER): "母亲",
    (1, F, R.HUSBAND): "婆婆",
    (1, F, R.WIFE): "岳母",
    # Peers, male
    (0, M, R.ELDER_BROTHER): "哥哥",
    (0, M, R.YOUNGER_BROTHER): "弟弟",
    (0, M, R.ELDER_SISTER): "姐夫",
    (0, M, R.YOUNGER_SISTER): "妹夫",
    (0, M, R.HUSBAND): "丈夫",
    (0, M, R.WIFE): "妻子",
    (0, M, R.FATHER): "父亲",
    (0, M, R.MOTHER): "母亲",
    # Peers, female
    (0, F, R.ELDER_SISTER): "姐姐",
    (0, F, R.YOUNGER_SISTER): "妹妹",
    (0, F, R.ELDER_BROTHER): "嫂子",
    (0, F, R.YOUNGER_BROTHER): "弟媳",
    (0, F, R.HUSBAND): "丈夫",
    (0, F, R.WIFE): "妻子",
    (0, F, R.FATHER): "父亲",
    (0, F, R.MOTHER): "母亲",
    # Juniors, male
    (-1, M, R.SON): "儿子",
    (-1, M, R.DAUGHTER): "女婿",
    (-1, M, R.ELDER_BROTHER): "侄子",
    (-1, M, R.YOUNGER_BROTHER): "侄子",
    (-1, M, R.ELDER_SISTER): "外甥",
    (-1, M, R.YOUNGER_SISTER): "外甥",
    # Juniors, female
    (-1, F, R.SON): "儿媳",
    (-1, F, R.DAUGHTER): "女儿",
    (-1, F, R.ELDER_BROTHER): "侄女",
    (-1, F, R.YOUNGER_BROTHER): "侄女",
    (-1, F, R.ELDER_SISTER): "外甥女",
    (-1, F, R.YOUNGER_SISTER): "外甥女",
})


def lookup_title(generation: int, gender: Gender, relation: ElementaryRelation) -> str:
    """Look up the title for a folded chain.

    Raises:
        NoTitleMapping: if the key is not in TITLE_TABLE
    """
    key = (generation, gender, relation)
    try:
        return TITLE_TABLE[key]
    except KeyError:
        raise NoTitleMapping(key) from None


_GENERIC_LABELS: dict[int, tuple[str, str]] = {
    1: ("长辈（男）", "长辈（女）"),
    0: ("同辈（男）", "同辈（女）"),
    -1: ("晚辈（男）", "晚辈（女）"),
}


def generic_title(generation: int, gender: Gender) -> str:
    """Synthesize a generic label from generation and gender alone."""
    if generation > 1:
        male, female = "太爷爷辈", "太奶奶辈"
    elif generation in _GENERIC_LABELS:
        male, female = _GENERIC_LABELS[generation]
    else:
        return UNKNOWN_RELATION_SENTINEL
    return male if gender == Gender.MALE else female
