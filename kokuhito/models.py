"""
Snapshots imutáveis de pessoas e casos.

O banco é o dono de todos os registros; a aplicação só guarda cópias
derivadas, reconstruídas a cada leitura.
"""
from dataclasses import dataclass, replace
from typing import Optional

from .constants import UNKNOWN_PERSON_NAME


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    created_at: Optional[str] = None
    case_count: int = 0

    @classmethod
    def from_row(cls, row):
        return cls(id=str(row['id']), name=row.get('name') or "", created_at=row.get('created_at'))

    def with_count(self, count):
        return replace(self, case_count=count)


# Sentinela para referências que apontam para uma pessoa ausente
UNKNOWN_PERSON = Person(id="", name=UNKNOWN_PERSON_NAME)


@dataclass(frozen=True)
class Case:
    id: str
    requester_id: str
    related_person_id: str
    vision_1: Optional[str] = None
    vision_2: Optional[str] = None
    resolution_comment: Optional[str] = None
    is_resolved: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=str(row['id']),
            requester_id=str(row['requester_id']),
            related_person_id=str(row['related_person_id']),
            vision_1=row.get('vision_1'),
            vision_2=row.get('vision_2'),
            resolution_comment=row.get('resolution_comment'),
            is_resolved=bool(row.get('is_resolved')),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    def involves(self, person_id):
        return person_id in (self.requester_id, self.related_person_id)


@dataclass(frozen=True)
class CaseRow:
    """Caso com as pessoas já resolvidas, pronto para exibição."""
    case: Case
    requester: Person
    related_person: Person

    @property
    def id(self):
        return self.case.id

    @property
    def is_resolved(self):
        return self.case.is_resolved

    @property
    def created_at(self):
        return self.case.created_at


@dataclass(frozen=True)
class CaseStats:
    total: int
    pending: int
    resolved: int
    people: int
