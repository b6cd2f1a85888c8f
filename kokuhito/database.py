import logging
from collections import namedtuple

import httpx
import streamlit as st
from postgrest.exceptions import APIError
from supabase import create_client

from .errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

# --- Filtros e ordenação aceitos por select() ---
Eq = namedtuple('Eq', ['column', 'value'])
AnyEq = namedtuple('AnyEq', ['columns', 'value'])
In = namedtuple('In', ['column', 'values'])
Order = namedtuple('Order', ['column', 'ascending'])


# --- Conexão Supabase ---
def get_supabase_client():
    try:
        url = st.secrets["supabase"]["url"]
        key = st.secrets["supabase"]["key"]
        return create_client(url, key)
    except KeyError:
        st.error("Erro de configuração: seção [supabase] não encontrada. Verifique .streamlit/secrets.toml.")
        st.stop()


@st.cache_resource
def init_store():
    """
    Cria o SupabaseStore uma única vez por processo
    """
    return SupabaseStore(get_supabase_client())


def _store_error(table, e):
    message = getattr(e, 'message', None) or str(e)
    logger.error("Falha no banco (%s): %s", table, message)
    return StoreError(message, table=table)


class SupabaseStore:
    """
    Implementação do RecordStore sobre o cliente Supabase (PostgREST).

    select(table, where=None, order=None) -> list[dict]
    insert(table, row) -> dict
    update(table, row_id, fields) -> None
    delete(table, row_id) -> None

    A exclusão em cascata de casos ao remover uma pessoa é feita pela
    chave estrangeira no banco (ON DELETE CASCADE).
    """

    def __init__(self, client):
        self.client = client

    def select(self, table, where=None, order=None):
        if isinstance(where, In) and not where.values:
            return []
        query = self.client.table(table).select("*")
        if isinstance(where, Eq):
            query = query.eq(where.column, where.value)
        elif isinstance(where, AnyEq):
            query = query.or_(",".join(f"{col}.eq.{where.value}" for col in where.columns))
        elif isinstance(where, In):
            query = query.in_(where.column, list(where.values))
        elif where is not None:
            raise TypeError(f"Filtro não suportado: {where!r}")
        if order is not None:
            query = query.order(order.column, desc=not order.ascending)
        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as e:
            raise _store_error(table, e) from e
        return response.data or []

    def insert(self, table, row):
        try:
            response = self.client.table(table).insert(row).execute()
        except (APIError, httpx.HTTPError) as e:
            raise _store_error(table, e) from e
        if not response.data:
            raise StoreError("O banco não retornou o registro inserido", table=table)
        created = response.data[0]
        logger.info("Inserido em %s: id=%s", table, created.get('id'))
        return created

    def update(self, table, row_id, fields):
        try:
            response = self.client.table(table).update(fields).eq('id', row_id).execute()
        except (APIError, httpx.HTTPError) as e:
            raise _store_error(table, e) from e
        if not response.data:
            raise NotFoundError(table, row_id)
        logger.info("Atualizado em %s: id=%s campos=%s", table, row_id, sorted(fields))

    def delete(self, table, row_id):
        try:
            response = self.client.table(table).delete().eq('id', row_id).execute()
        except (APIError, httpx.HTTPError) as e:
            raise _store_error(table, e) from e
        if not response.data:
            raise NotFoundError(table, row_id)
        logger.info("Removido de %s: id=%s", table, row_id)
