"""
Visão de casos: leitura ligada às pessoas, separação pendentes/resolvidos e
operações de alteração.

Depois de qualquer alteração bem-sucedida quem chama deve ler de novo
(fetch_all / fetch_for_person); não há atualização local incremental.
"""
import logging

from .constants import (
    CASE_EDITABLE_FIELDS, CASE_TEXT_FIELDS, TABLE_CASES, TABLE_PEOPLE
)
from .database import AnyEq, In, Order
from .errors import ValidationError
from .linker import link, referenced_ids
from .models import Case, CaseStats, Person
from .utils import blank_to_none, is_blank

logger = logging.getLogger(__name__)

NEWEST_FIRST = Order('created_at', False)


def partition(rows):
    """
    (pendentes, resolvidos), preservando a ordem de entrada
    """
    pending = [r for r in rows if not r.is_resolved]
    resolved = [r for r in rows if r.is_resolved]
    return pending, resolved


def find(rows, case_id):
    for r in rows:
        if r.id == case_id:
            return r
    return None


def _clean_fields(fields):
    data = {}
    for key, val in fields.items():
        if key in CASE_TEXT_FIELDS:
            data[key] = blank_to_none(val)
        elif key == 'is_resolved':
            data[key] = bool(val)
        else:
            data[key] = val
    return data


def compute_stats(cases, people_count):
    resolved = sum(1 for c in cases if c.is_resolved)
    return CaseStats(total=len(cases), pending=len(cases) - resolved,
                     resolved=resolved, people=people_count)


class CaseView:
    def __init__(self, store):
        self.store = store

    # --- leitura ---
    def _link_rows(self, rows):
        cases = [Case.from_row(r) for r in rows]
        ids = referenced_ids(cases)
        people_rows = self.store.select(TABLE_PEOPLE, where=In('id', ids))
        return link(cases, [Person.from_row(p) for p in people_rows])

    def fetch_cases(self):
        """
        Casos sem ligação com pessoas (usado na contagem por pessoa)
        """
        return [Case.from_row(r) for r in self.store.select(TABLE_CASES, order=NEWEST_FIRST)]

    def fetch_all(self):
        return self._link_rows(self.store.select(TABLE_CASES, order=NEWEST_FIRST))

    def fetch_for_person(self, person_id):
        where = AnyEq(('requester_id', 'related_person_id'), person_id)
        return self._link_rows(self.store.select(TABLE_CASES, where=where, order=NEWEST_FIRST))

    def stats(self):
        cases = self.fetch_cases()
        people = self.store.select(TABLE_PEOPLE)
        return compute_stats(cases, len(people))

    # --- alteração ---
    def create(self, requester_id=None, related_person_id=None, vision_1=None,
               vision_2=None, resolution_comment=None, is_resolved=False):
        """
        Registra um caso e devolve o id. Solicitante e pessoa relacionada são
        obrigatórios; a validação acontece antes de qualquer chamada ao banco.
        """
        if is_blank(requester_id) or is_blank(related_person_id):
            raise ValidationError("Preencha os campos obrigatórios")
        row = {'requester_id': requester_id, 'related_person_id': related_person_id}
        row.update(_clean_fields({
            'vision_1': vision_1, 'vision_2': vision_2,
            'resolution_comment': resolution_comment, 'is_resolved': is_resolved,
        }))
        created = self.store.insert(TABLE_CASES, row)
        return str(created['id'])

    def update(self, case_id, fields):
        if not fields:
            raise ValidationError("Nenhum campo para atualizar")
        invalid = [k for k in fields if k not in CASE_EDITABLE_FIELDS]
        if invalid:
            raise ValidationError(f"Campos não editáveis: {', '.join(sorted(invalid))}")
        self.store.update(TABLE_CASES, case_id, _clean_fields(fields))

    def mark_resolved(self, case_id):
        self.update(case_id, {'is_resolved': True})

    def delete(self, case_id):
        # irreversível; a confirmação é responsabilidade da tela
        self.store.delete(TABLE_CASES, case_id)
