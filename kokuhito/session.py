from .constants import (
    AUTH_KEY, CASE_QUERY_PARAM, DELETE_CONFIRM_KEY, EDIT_CASE_KEY, PAGE_HOME, PAGE_KEY, THEME_KEY
)


class SessionContext:
    """
    Estado da sessão passado explicitamente às telas.

    state: mapeamento mutável (st.session_state no app, dict nos testes)
    query_params: parâmetros da URL (st.query_params no app); guarda o id do
    caso selecionado para que o link possa ser compartilhado
    """

    def __init__(self, state, query_params):
        self.state = state
        self.query_params = query_params

    # --- autenticação ---
    @property
    def is_authenticated(self):
        return bool(self.state.get(AUTH_KEY, False))

    def login(self, password, expected):
        if not expected or password != expected:
            return False
        self.state[AUTH_KEY] = True
        return True

    def logout(self):
        self.state[AUTH_KEY] = False
        self.state[PAGE_KEY] = PAGE_HOME
        self.clear_selected_case()

    # --- tema ---
    @property
    def is_dark(self):
        return self.state.get(THEME_KEY) == "dark"

    def toggle_theme(self):
        self.state[THEME_KEY] = "light" if self.is_dark else "dark"

    # --- navegação ---
    @property
    def current_page(self):
        return self.state.get(PAGE_KEY, PAGE_HOME)

    def navigate(self, page):
        self.state[PAGE_KEY] = page

    # --- caso selecionado (URL) ---
    @property
    def selected_case_id(self):
        return self.query_params.get(CASE_QUERY_PARAM) or None

    def select_case(self, case_id):
        self.query_params[CASE_QUERY_PARAM] = case_id
        self.state[EDIT_CASE_KEY] = None
        self.state[DELETE_CONFIRM_KEY] = None

    def clear_selected_case(self):
        self.query_params.pop(CASE_QUERY_PARAM, None)
        self.state[EDIT_CASE_KEY] = None
        self.state[DELETE_CONFIRM_KEY] = None

    # --- diálogos ---
    @property
    def edit_case_id(self):
        return self.state.get(EDIT_CASE_KEY)

    @edit_case_id.setter
    def edit_case_id(self, case_id):
        self.state[EDIT_CASE_KEY] = case_id

    @property
    def delete_confirm_id(self):
        return self.state.get(DELETE_CONFIRM_KEY)

    @delete_confirm_id.setter
    def delete_confirm_id(self, row_id):
        self.state[DELETE_CONFIRM_KEY] = row_id
