"""
Exportação CSV de pessoas e casos (tela Dados).
"""
import pandas as pd

from .constants import MAP_CASES, MAP_PEOPLE, R_MAP_CASES, R_MAP_PEOPLE


def people_frame(people):
    """
    DataFrame das pessoas (com contagem de casos), colunas com rótulos em português
    """
    if not people:
        return pd.DataFrame(columns=MAP_PEOPLE.keys())
    df = pd.DataFrame([
        {'id': p.id, 'name': p.name, 'case_count': p.case_count, 'created_at': p.created_at}
        for p in people
    ])
    return df.rename(columns=R_MAP_PEOPLE)[list(MAP_PEOPLE.keys())]


def cases_frame(rows):
    if not rows:
        return pd.DataFrame(columns=MAP_CASES.keys())
    df = pd.DataFrame([
        {
            'id': r.id,
            'requester_name': r.requester.name,
            'related_person_name': r.related_person.name,
            'vision_1': r.case.vision_1,
            'vision_2': r.case.vision_2,
            'resolution_comment': r.case.resolution_comment,
            'is_resolved': r.is_resolved,
            'created_at': r.case.created_at,
            'updated_at': r.case.updated_at,
        }
        for r in rows
    ])
    return df.rename(columns=R_MAP_CASES)[list(MAP_CASES.keys())]


def to_csv_bytes(df):
    # utf-8-sig para o Excel abrir os acentos corretamente
    return df.to_csv(index=False).encode('utf-8-sig')
