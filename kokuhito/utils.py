import unicodedata

import pandas as pd

MONTHS_PT = ['janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho', 'julho',
             'agosto', 'setembro', 'outubro', 'novembro', 'dezembro']


def blank_to_none(val):
    """
    Converte texto vazio (ou só espaços) em None para gravar NULL no banco
    """
    if val is None: return None
    if isinstance(val, str) and not val.strip(): return None
    return val


def is_blank(val):
    return val is None or (isinstance(val, str) and not val.strip())


def name_sort_key(name):
    """
    Chave de ordenação por nome, sem distinção de acentos e maiúsculas
    ("Álvaro" fica junto de "alvaro", antes de "Beto")
    """
    text = unicodedata.normalize('NFKD', name or "")
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return text.casefold()


def initials(name):
    parts = [p for p in (name or "").split(" ") if p]
    return "".join(p[0] for p in parts).upper()[:2]


def format_date(val, with_time=False):
    """
    Formata um timestamp ISO como "05 de março de 2024" (ou com " às HH:MM")
    """
    if is_blank(val): return ""
    dt = pd.to_datetime(val, errors='coerce')
    if pd.isna(dt): return str(val)
    text = f"{dt.day:02d} de {MONTHS_PT[dt.month - 1]} de {dt.year}"
    if with_time:
        text += f" às {dt.hour:02d}:{dt.minute:02d}"
    return text


def format_short_date(val):
    if is_blank(val): return ""
    dt = pd.to_datetime(val, errors='coerce')
    if pd.isna(dt): return str(val)
    return dt.strftime('%d/%m/%Y')
