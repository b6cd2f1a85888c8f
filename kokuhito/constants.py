# Constantes e mapeamentos

TABLE_PEOPLE = "people"
TABLE_CASES = "cases"

# Marcador exibido quando um caso referencia uma pessoa inexistente
UNKNOWN_PERSON_NAME = "Desconhecido"

# Chaves de ordenação da lista de pessoas
SORT_NAME = "name"
SORT_MOST_CASES = "most-cases"
SORT_LEAST_CASES = "least-cases"

SORT_LABELS = {
    SORT_NAME: "Nome (A-Z)",
    SORT_MOST_CASES: "Mais casos",
    SORT_LEAST_CASES: "Menos casos",
}

# Campos de texto opcionais de um caso (vazio -> NULL)
CASE_TEXT_FIELDS = ('vision_1', 'vision_2', 'resolution_comment')
# Campos que a edição pode alterar; solicitante e pessoa relacionada são fixos
CASE_EDITABLE_FIELDS = CASE_TEXT_FIELDS + ('is_resolved',)

# Páginas
PAGE_HOME = "Início"
PAGE_CREATE_CASE = "Criar Caso"
PAGE_CASES = "Casos"
PAGE_PEOPLE = "Pessoas"
PAGE_DATA = "Dados"
PAGES = [PAGE_HOME, PAGE_CREATE_CASE, PAGE_CASES, PAGE_PEOPLE, PAGE_DATA]

# Chaves de estado da sessão / parâmetro de URL
AUTH_KEY = "kokuhito-auth"
THEME_KEY = "theme"
PAGE_KEY = "current_page"
EDIT_CASE_KEY = "edit_case_id"
DELETE_CONFIRM_KEY = "delete_confirm_id"
CASE_QUERY_PARAM = "id"

# Mapeamento rótulo (CSV) -> coluna, usado na exportação
MAP_PEOPLE = {
    'id': 'id', 'Nome': 'name', 'Casos': 'case_count', 'Criado em': 'created_at'
}

MAP_CASES = {
    'id': 'id', 'Solicitante': 'requester_name', 'Pessoa Relacionada': 'related_person_name',
    'Visão 1': 'vision_1', 'Visão 2': 'vision_2', 'Resolução / Comentário': 'resolution_comment',
    'Resolvido': 'is_resolved', 'Criado em': 'created_at', 'Atualizado em': 'updated_at'
}

# Mapeamento reverso
R_MAP_PEOPLE = {v: k for k, v in MAP_PEOPLE.items()}
R_MAP_CASES = {v: k for k, v in MAP_CASES.items()}
