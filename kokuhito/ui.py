import streamlit as st

from .cases import CaseView, find, partition
from .constants import (
    PAGE_CASES, PAGE_CREATE_CASE, PAGE_DATA, PAGE_HOME, PAGE_PEOPLE, PAGES,
    SORT_LABELS, SORT_NAME
)
from .database import init_store
from .errors import KokuhitoError, NotFoundError, ValidationError
from .export import cases_frame, people_frame, to_csv_bytes
from .people import (
    case_count_label, create_person, delete_person, deletion_warning, filter_by_name,
    load_all, rename_person, sort_by, with_case_counts
)
from .utils import format_date, format_short_date, initials

# --- CSS ---
LIGHT = {'bg': '#fdfbff', 'card': '#ffffff', 'text': '#333', 'muted': '#777', 'border': '#e5e0ef', 'primary': '#7c5cbf'}
DARK = {'bg': '#1b1725', 'card': '#262033', 'text': '#eee', 'muted': '#aaa', 'border': '#3a3250', 'primary': '#b39ae8'}


def load_css(dark=False):
    c = DARK if dark else LIGHT
    st.markdown(f"""
        <style>
        html, body, [class*="css"] {{ font-family: "Nunito", sans-serif; color: {c['text']}; }}
        .stApp {{ background-color: {c['bg']}; }}
        .block-container {{ padding-top: 4rem !important; padding-bottom: 3rem !important; }}

        div[data-testid="stBorder"] {{
            margin: 5px 0 !important;
            padding: 12px !important;
            border: 1px solid {c['border']} !important;
            border-radius: 18px;
            background-color: {c['card']};
        }}

        .custom-title {{ font-family: "Poppins", sans-serif; font-size: 28px; font-weight: bold; color: {c['text']}; margin: 5px 0 15px 0; }}
        .custom-header {{ font-size: 18px; font-weight: bold; color: {c['primary']}; border-bottom: 1px solid {c['border']}; padding-bottom: 2px; margin: 20px 0 10px 0; }}
        .muted {{ color: {c['muted']}; font-size: 14px; }}
        .avatar {{ width: 56px; height: 56px; border-radius: 50%; background: linear-gradient(135deg, {c['primary']}, #e58fb5); color: #fff; font-weight: bold; font-size: 20px; display: flex; align-items: center; justify-content: center; }}
        .badge {{ display: inline-block; padding: 2px 10px; border-radius: 999px; font-size: 12px; background: {c['border']}; color: {c['text']}; }}
        .badge-resolved {{ background: #2e9d5b; color: #fff; }}

        section[data-testid="stSidebar"] button {{ width: 100%; border-radius: 14px; margin-bottom: 6px; font-weight: bold; text-align: left; }}
        </style>
    """, unsafe_allow_html=True)


def custom_title(text):
    st.markdown(f'<div class="custom-title">{text}</div>', unsafe_allow_html=True)


def custom_header(text):
    st.markdown(f'<div class="custom-header">{text}</div>', unsafe_allow_html=True)


def status_badge(is_resolved):
    if is_resolved:
        return '<span class="badge badge-resolved">Resolvido</span>'
    return '<span class="badge">Pendente</span>'


# --- Leituras em cache (limpas após cada alteração) ---
@st.cache_data(ttl=600)
def load_people_with_counts():
    store = init_store()
    return with_case_counts(load_all(store), CaseView(store).fetch_cases())


@st.cache_data(ttl=600)
def load_case_rows():
    return CaseView(init_store()).fetch_all()


@st.cache_data(ttl=600)
def load_person_case_rows(person_id):
    return CaseView(init_store()).fetch_for_person(person_id)


@st.cache_data(ttl=600)
def load_stats():
    return CaseView(init_store()).stats()


def finish_mutation(message, icon="✅"):
    """
    Alteração confirmada pelo banco: avisa, invalida o cache e recarrega a tela
    """
    st.toast(message, icon=icon)
    st.cache_data.clear()
    st.rerun()


def show_error(title, e):
    if isinstance(e, NotFoundError):
        st.cache_data.clear()
    st.error(f"{title}: {e}")


# --- Menu lateral ---
def render_sidebar(session):
    icons = {PAGE_HOME: "🏠", PAGE_CREATE_CASE: "➕", PAGE_CASES: "📂", PAGE_PEOPLE: "👥", PAGE_DATA: "💾"}
    with st.sidebar:
        st.markdown("### 🌸 Kokuhito")
        for page in PAGES:
            label = f"👉 {page}" if session.current_page == page else f"{icons[page]} {page}"
            if st.button(label, key=f"menu_btn_{page}", use_container_width=True):
                if page != PAGE_CASES:
                    session.clear_selected_case()
                session.navigate(page)
                st.rerun()
        st.markdown("---")
        theme_label = "☀️ Tema claro" if session.is_dark else "🌙 Tema escuro"
        if st.button(theme_label, key="theme_btn", use_container_width=True):
            session.toggle_theme()
            st.rerun()
        if st.button("🚪 Sair", key="logout_btn", use_container_width=True):
            session.logout()
            st.rerun()
    return session.current_page


# --- Início ---
def render_home(session):
    custom_title("Bem vindo(a), Kokuhito")
    try:
        stats = load_stats()
    except KokuhitoError as e:
        show_error("Erro ao carregar estatísticas", e)
        return

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total de Casos", stats.total)
    c2.metric("Pendentes", stats.pending)
    c3.metric("Resolvidos", stats.resolved)
    c4.metric("Pessoas", stats.people)

    custom_header("Ações Rápidas")
    a1, a2, a3 = st.columns(3)
    for col, page, label in [(a1, PAGE_CREATE_CASE, "➕ Criar Novo Caso"),
                             (a2, PAGE_CASES, "📂 Ver Casos"),
                             (a3, PAGE_PEOPLE, "👥 Gerenciar Pessoas")]:
        if col.button(label, key=f"quick_{page}", use_container_width=True):
            session.navigate(page)
            st.rerun()


# --- Criar caso ---
def person_selectbox(label, people, key):
    names = {p.id: p.name for p in people}
    return st.selectbox(
        label, [None] + list(names), key=key,
        format_func=lambda pid: "Selecione uma pessoa" if pid is None else names[pid]
    )


def render_create_case(session):
    custom_title("Criar Novo Caso")
    st.markdown('<div class="muted">Preencha as informações abaixo para registrar um novo caso</div>', unsafe_allow_html=True)
    try:
        people = load_people_with_counts()
    except KokuhitoError as e:
        show_error("Erro ao carregar pessoas", e)
        return

    with st.form("new_case_form"):
        requester_id = person_selectbox("Quem está registrando?", people, "new_case_requester")
        related_id = person_selectbox("Pessoa relacionada", people, "new_case_related")
        vision_1 = st.text_input("Visão 1", placeholder="Descreva a primeira visão...")
        vision_2 = st.text_input("Visão 2", placeholder="Descreva a segunda visão...")
        comment = st.text_area("Resolução / Comentário", placeholder="Adicione comentários ou resolução...", height=120)
        is_resolved = st.checkbox("Marcar como resolvido")

        if st.form_submit_button("Salvar Caso", use_container_width=True):
            try:
                CaseView(init_store()).create(
                    requester_id=requester_id, related_person_id=related_id,
                    vision_1=vision_1, vision_2=vision_2,
                    resolution_comment=comment, is_resolved=is_resolved
                )
            except ValidationError as e:
                st.error(f"Ops! 😅 {e}")
            except KokuhitoError as e:
                show_error("Erro ao salvar caso", e)
            else:
                session.navigate(PAGE_CASES)
                finish_mutation("Prontinho! Caso salvo 💙")


# --- Casos ---
def render_case_detail(session, row):
    view = CaseView(init_store())
    case = row.case
    with st.container(border=True):
        custom_header("Detalhes do Caso")
        st.markdown(f'<div class="muted">{format_date(case.created_at, with_time=True)}</div>', unsafe_allow_html=True)
        st.markdown(f"**Solicitante:** {row.requester.name}")
        st.markdown(f"**Pessoa Relacionada:** {row.related_person.name}")
        if case.vision_1: st.markdown(f"**Visão 1:** {case.vision_1}")
        if case.vision_2: st.markdown(f"**Visão 2:** {case.vision_2}")
        if case.resolution_comment: st.markdown(f"**Resolução / Comentário:** {case.resolution_comment}")
        st.markdown(status_badge(case.is_resolved), unsafe_allow_html=True)

        if session.edit_case_id == case.id:
            with st.form("edit_case_form"):
                ed_v1 = st.text_input("Visão 1", value=case.vision_1 or "")
                ed_v2 = st.text_input("Visão 2", value=case.vision_2 or "")
                ed_comment = st.text_area("Resolução / Comentário", value=case.resolution_comment or "", height=120)
                ed_resolved = st.checkbox("Marcar como resolvido", value=case.is_resolved)

                c_sv, c_cl = st.columns(2)
                if c_sv.form_submit_button("Salvar Alterações"):
                    try:
                        view.update(case.id, {
                            'vision_1': ed_v1, 'vision_2': ed_v2,
                            'resolution_comment': ed_comment, 'is_resolved': ed_resolved
                        })
                    except KokuhitoError as e:
                        show_error("Erro ao atualizar caso", e)
                    else:
                        session.clear_selected_case()
                        finish_mutation("Caso atualizado! 💙")
                if c_cl.form_submit_button("Cancelar"):
                    session.edit_case_id = None
                    st.rerun()
            return

        c_res, c_ed, c_dl, c_cl = st.columns(4)
        if not case.is_resolved and c_res.button("✅ Marcar como Resolvido", key=f"res_{case.id}"):
            try:
                view.mark_resolved(case.id)
            except KokuhitoError as e:
                show_error("Erro ao atualizar caso", e)
            else:
                session.clear_selected_case()
                finish_mutation("Caso resolvido! ✅")
        if c_ed.button("Editar", key=f"ed_case_{case.id}"):
            session.edit_case_id = case.id
            st.rerun()
        if c_dl.button("🗑️ Excluir", key=f"dl_case_{case.id}"):
            session.delete_confirm_id = case.id
            st.rerun()
        if c_cl.button("Fechar", key=f"close_case_{case.id}"):
            session.clear_selected_case()
            st.rerun()

        if session.delete_confirm_id == case.id:
            st.warning("Tem certeza? Isso não pode ser desfeito! 🗑️ O caso será excluído permanentemente.")
            if st.button("Sim, excluir", key=f"yes_case_{case.id}"):
                try:
                    view.delete(case.id)
                except KokuhitoError as e:
                    show_error("Erro ao excluir caso", e)
                else:
                    session.clear_selected_case()
                    finish_mutation("Caso excluído 🗑️", icon="🗑️")


def render_case_list(session, rows, empty_text):
    if not rows:
        st.info(empty_text)
        return
    for row in rows:
        with st.container(border=True):
            c1, c2 = st.columns([8, 2])
            c1.markdown(f"**{row.requester.name}**  \nSobre: {row.related_person.name}")
            c1.markdown(f'<div class="muted">{format_date(row.created_at)}</div>', unsafe_allow_html=True)
            c2.markdown(status_badge(row.is_resolved), unsafe_allow_html=True)
            if c2.button("Abrir", key=f"open_case_{row.id}"):
                session.select_case(row.id)
                st.rerun()


def render_cases(session):
    custom_title("Casos")
    st.markdown('<div class="muted">Visualize e gerencie todos os casos registrados</div>', unsafe_allow_html=True)
    try:
        rows = load_case_rows()
    except KokuhitoError as e:
        show_error("Erro ao carregar casos", e)
        return

    selected_id = session.selected_case_id
    if selected_id:
        selected = find(rows, selected_id)
        if selected is None:
            # caso inexistente na URL: limpa a seleção
            session.clear_selected_case()
        else:
            render_case_detail(session, selected)

    pending, resolved = partition(rows)
    tab_p, tab_r = st.tabs([f"Pendentes ({len(pending)})", f"Resolvidos ({len(resolved)})"])
    with tab_p:
        render_case_list(session, pending, "Nenhum caso pendente no momento 🎉")
    with tab_r:
        render_case_list(session, resolved, "Nenhum caso resolvido ainda")


# --- Pessoas ---
def render_person_detail(session, person):
    store = init_store()
    with st.container(border=True):
        c_av, c_nm = st.columns([1, 6])
        c_av.markdown(f'<div class="avatar">{initials(person.name)}</div>', unsafe_allow_html=True)
        c_nm.markdown(f"### {person.name}")
        c_nm.markdown(f'<span class="badge">{case_count_label(person.case_count)} relacionados</span>', unsafe_allow_html=True)

        try:
            person_rows = load_person_case_rows(person.id)
        except KokuhitoError as e:
            show_error("Erro ao carregar casos", e)
            person_rows = []
        if person_rows:
            st.markdown("**Casos Relacionados:**")
            for row in person_rows:
                mark = "✓" if row.is_resolved else "⏳"
                label = f"{mark} {row.requester.name} → {row.related_person.name} ({format_short_date(row.created_at)})"
                if st.button(label, key=f"person_case_{row.id}", use_container_width=True):
                    session.navigate(PAGE_CASES)
                    session.select_case(row.id)
                    st.rerun()

        with st.form(f"rename_person_{person.id}"):
            new_name = st.text_input("Nome", value=person.name)
            if st.form_submit_button("Salvar"):
                try:
                    rename_person(store, person.id, new_name)
                except ValidationError as e:
                    st.error(f"{e}: por favor, digite um nome")
                except KokuhitoError as e:
                    show_error("Erro ao editar pessoa", e)
                else:
                    finish_mutation("Pessoa atualizada! 💙")

        if st.button("🗑️ Excluir pessoa", key=f"dl_person_{person.id}"):
            session.delete_confirm_id = person.id
            st.rerun()
        if session.delete_confirm_id == person.id:
            st.warning(f"Tem certeza? {deletion_warning(person)}")
            if st.button("Sim, excluir", key=f"yes_person_{person.id}"):
                try:
                    delete_person(store, person.id)
                except KokuhitoError as e:
                    show_error("Erro ao excluir pessoa", e)
                else:
                    session.delete_confirm_id = None
                    finish_mutation("Pessoa excluída 🗑️", icon="🗑️")


def render_people(session):
    custom_title("Pessoas")
    st.markdown('<div class="muted">Gerencie todas as pessoas cadastradas no sistema</div>', unsafe_allow_html=True)
    try:
        people = load_people_with_counts()
    except KokuhitoError as e:
        show_error("Erro ao carregar pessoas", e)
        return

    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Pesquisar por nome...", key="people_search")
    sort_key = c2.selectbox("Ordenar", list(SORT_LABELS), format_func=SORT_LABELS.get,
                            index=list(SORT_LABELS).index(SORT_NAME), key="people_sort")

    with st.expander("➕ Adicionar Pessoa", expanded=False):
        with st.form("new_person_form", clear_on_submit=True):
            name = st.text_input("Nome", placeholder="Digite o nome...")
            if st.form_submit_button("Adicionar"):
                try:
                    create_person(init_store(), name)
                except ValidationError:
                    st.error("Nome obrigatório: por favor, digite um nome")
                except KokuhitoError as e:
                    show_error("Erro ao adicionar pessoa", e)
                else:
                    finish_mutation("Pessoa adicionada! 🎉", icon="🎉")

    visible = sort_by(filter_by_name(people, search), sort_key)
    if not visible:
        st.info("Nenhuma pessoa encontrada")
        return

    df_display = people_frame(visible)[['Nome', 'Casos']]
    selection = st.dataframe(
        df_display,
        column_config={"Casos": st.column_config.NumberColumn("Casos", format="%d")},
        use_container_width=True, on_select="rerun", selection_mode="single-row", hide_index=True
    )
    if selection.selection.rows:
        person = visible[selection.selection.rows[0]]
        render_person_detail(session, person)


# --- Dados ---
def render_data_management():
    custom_title("Dados")
    st.info("Exportação dos registros em CSV.")
    try:
        people = load_people_with_counts()
        rows = load_case_rows()
    except KokuhitoError as e:
        show_error("Erro ao carregar dados", e)
        return

    tab1, tab2 = st.tabs(["Pessoas", "Casos"])
    with tab1:
        df_people = people_frame(people)
        st.dataframe(df_people, use_container_width=True, hide_index=True)
        st.download_button("📥 Exportar CSV", to_csv_bytes(df_people), "Pessoas.csv", "text/csv", key="exp_people")
    with tab2:
        df_cases = cases_frame(rows)
        st.dataframe(df_cases, use_container_width=True, hide_index=True)
        st.download_button("📥 Exportar CSV", to_csv_bytes(df_cases), "Casos.csv", "text/csv", key="exp_cases")
