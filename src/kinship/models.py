"""Data classes for relationship graph entities."""

from dataclasses import dataclass
from enum import Enum


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"


class Role(str, Enum):
    """The role a parent plays on a parent -> child edge."""

    FATHER = "father"
    MOTHER = "mother"

    @classmethod
    def for_sex(cls, sex: Sex) -> "Role":
        return cls.FATHER if sex is Sex.MALE else cls.MOTHER


@dataclass(frozen=True)
class Person:
    id: int
    sex: Sex
    name: str = ""

    def __str__(self) -> str:
        return self.name or f"Person {self.id}"


@dataclass(frozen=True)
class Relationship:
    parent_id: int
    child_id: int
    role: Role  # FATHER or MOTHER
