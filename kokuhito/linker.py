"""
Junção de casos com as pessoas que eles referenciam.
"""
from .models import UNKNOWN_PERSON, CaseRow


def referenced_ids(cases):
    """
    Ids de pessoa citados pelos casos (solicitante e relacionada), sem repetição,
    na ordem em que aparecem
    """
    seen = {}
    for c in cases:
        seen.setdefault(c.requester_id, None)
        seen.setdefault(c.related_person_id, None)
    return list(seen)


def link(cases, people):
    """
    Monta as linhas de exibição: cada caso recebe o objeto Person do solicitante
    e da pessoa relacionada.

    O mapa id -> Person cobre só os ids referenciados pelos casos, então um
    conjunto parcial de pessoas é suficiente. Referência ausente vira
    UNKNOWN_PERSON; nunca levanta exceção.
    """
    wanted = set(referenced_ids(cases))
    people_map = {p.id: p for p in people if p.id in wanted}
    return [
        CaseRow(
            case=c,
            requester=people_map.get(c.requester_id, UNKNOWN_PERSON),
            related_person=people_map.get(c.related_person_id, UNKNOWN_PERSON),
        )
        for c in cases
    ]
