import logging

import streamlit as st

from kokuhito.auth import check_password
from kokuhito.constants import PAGE_CASES, PAGE_CREATE_CASE, PAGE_DATA, PAGE_HOME, PAGE_PEOPLE
from kokuhito.session import SessionContext
from kokuhito.ui import (
    load_css, render_cases, render_create_case, render_data_management, render_home,
    render_people, render_sidebar
)

st.set_page_config(page_title="Painel Kokuhito", page_icon="🌸", layout="wide")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main():
    session = SessionContext(st.session_state, st.query_params)
    load_css(session.is_dark)

    if not check_password(session):
        return

    # link direto para um caso (?id=...) abre a tela de casos
    if session.selected_case_id:
        session.navigate(PAGE_CASES)

    page = render_sidebar(session)

    if page == PAGE_HOME:
        render_home(session)
    elif page == PAGE_CREATE_CASE:
        render_create_case(session)
    elif page == PAGE_CASES:
        render_cases(session)
    elif page == PAGE_PEOPLE:
        render_people(session)
    elif page == PAGE_DATA:
        render_data_management()


if __name__ == "__main__":
    main()
