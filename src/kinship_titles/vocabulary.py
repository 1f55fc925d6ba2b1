"""Elementary relation vocabulary.

The ten single-character tokens a relation chain is composed of. Each token
carries a fixed gender and a fixed generation offset relative to the person
it is applied to.
"""
from __future__ import annotations

from enum import Enum

ROOT_TITLE = "我"
CONNECTIVE = "的"
HUSBAND_SYNONYM = "丈夫"
WIFE_SYNONYM = "妻子"


class Gender(str, Enum):
    """Gender of a kinship node."""
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class ElementaryRelation(str, Enum):
    """Atomic kinship relation tokens."""
    FATHER = "父"
    MOTHER = "母"
    HUSBAND = "夫"
    WIFE = "妻"
    ELDER_BROTHER = "兄"
    YOUNGER_BROTHER = "弟"
    ELDER_SISTER = "姐"
    YOUNGER_SISTER = "妹"
    SON = "子"
    DAUGHTER = "女"

    @property
    def gender(self) -> Gender:
        return _TRAITS[self][0]

    @property
    def generation_delta(self) -> int:
        """+1 for parents, 0 for spouses and siblings, -1 for children."""
        return _TRAITS[self][1]

    @property
    def is_spouse(self) -> bool:
        return self in (ElementaryRelation.HUSBAND, ElementaryRelation.WIFE)

    @property
    def is_sibling(self) -> bool:
        return self in (
            ElementaryRelation.ELDER_BROTHER,
            ElementaryRelation.YOUNGER_BROTHER,
            ElementaryRelation.ELDER_SISTER,
            ElementaryRelation.YOUNGER_SISTER,
        )

    @property
    def is_lineal(self) -> bool:
        """Parent or child hop."""
        return self.generation_delta != 0

    @classmethod
    def from_token(cls, token: str) -> ElementaryRelation | None:
        """Return the relation for a single-character token, or None."""
        try:
            return cls(token)
        except ValueError:
            return None


_TRAITS: dict[ElementaryRelation, tuple[Gender, int]] = {
    ElementaryRelation.FATHER: (Gender.MALE, 1),
    ElementaryRelation.MOTHER: (Gender.FEMALE, 1),
    ElementaryRelation.HUSBAND: (Gender.MALE, 0),
    ElementaryRelation.WIFE: (Gender.FEMALE, 0),
    ElementaryRelation.ELDER_BROTHER: (Gender.MALE, 0),
    ElementaryRelation.YOUNGER_BROTHER: (Gender.MALE, 0),
    ElementaryRelation.ELDER_SISTER: (Gender.FEMALE, 0),
    ElementaryRelation.YOUNGER_SISTER: (Gender.FEMALE, 0),
    ElementaryRelation.SON: (Gender.MALE, -1),
    ElementaryRelation.DAUGHTER: (Gender.FEMALE, -1),
}
