"""
Tipos de erro compartilhados pelo núcleo e pelas telas.
"""


class KokuhitoError(Exception):
    """Erro base do painel."""


class ValidationError(KokuhitoError):
    """Campo obrigatório ausente ou não editável. Nenhuma chamada ao banco foi feita."""


class StoreError(KokuhitoError):
    """O banco rejeitou ou falhou uma operação."""

    def __init__(self, message, table=None):
        super().__init__(message)
        self.message = message
        self.table = table


class NotFoundError(StoreError):
    """O registro alvo não existe mais (ex.: removido por outra sessão)."""

    def __init__(self, table, row_id):
        super().__init__(f"Registro não encontrado em {table}: {row_id}", table=table)
        self.row_id = row_id
