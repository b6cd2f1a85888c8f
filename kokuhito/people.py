"""
Diretório de pessoas: carga, contagem de casos, busca e ordenação.
"""
import logging
from collections import Counter

from .constants import SORT_LEAST_CASES, SORT_MOST_CASES, SORT_NAME, TABLE_PEOPLE
from .database import Order
from .errors import ValidationError
from .models import Person
from .utils import is_blank, name_sort_key

logger = logging.getLogger(__name__)


def load_all(store):
    """
    Todas as pessoas, ordenadas por nome. StoreError se a leitura falhar.
    """
    rows = store.select(TABLE_PEOPLE, order=Order('name', True))
    return sort_by([Person.from_row(r) for r in rows], SORT_NAME)


def with_case_counts(people, cases):
    """
    Anota case_count em cada pessoa: casos em que ela é solicitante ou
    pessoa relacionada. Um caso dela com ela mesma conta uma vez.
    """
    counts = Counter()
    for c in cases:
        for pid in {c.requester_id, c.related_person_id}:
            counts[pid] += 1
    return [p.with_count(counts[p.id]) for p in people]


def filter_by_name(people, query):
    if is_blank(query):
        return list(people)
    needle = query.strip().casefold()
    return [p for p in people if needle in p.name.casefold()]


def sort_by(people, key):
    # sorted() é estável: empates mantêm a ordem de entrada
    if key == SORT_NAME:
        return sorted(people, key=lambda p: name_sort_key(p.name))
    if key == SORT_MOST_CASES:
        return sorted(people, key=lambda p: -p.case_count)
    if key == SORT_LEAST_CASES:
        return sorted(people, key=lambda p: p.case_count)
    raise ValueError(f"Ordenação desconhecida: {key}")


def create_person(store, name):
    if is_blank(name):
        raise ValidationError("Nome obrigatório")
    row = store.insert(TABLE_PEOPLE, {'name': name.strip()})
    return str(row['id'])


def rename_person(store, person_id, name):
    if is_blank(name):
        raise ValidationError("Nome obrigatório")
    store.update(TABLE_PEOPLE, person_id, {'name': name.strip()})


def delete_person(store, person_id):
    """
    Remove a pessoa. O banco remove junto todos os casos que a referenciam.
    """
    store.delete(TABLE_PEOPLE, person_id)
    logger.info("Pessoa removida: %s", person_id)


def deletion_warning(person):
    if person.case_count > 0:
        noun = "caso relacionado" if person.case_count == 1 else "casos relacionados"
        return (f"Esta pessoa tem {person.case_count} {noun}. "
                "Excluir a pessoa também excluirá os casos! 🗑️")
    return "Isso não pode ser desfeito! 🗑️"


def case_count_label(count):
    return f"{count} {'caso' if count == 1 else 'casos'}"
