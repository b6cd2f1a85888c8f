import logging

import streamlit as st

logger = logging.getLogger(__name__)


def check_password(session):
    """
    Portão de senha única.
    Retorna True se a sessão já está autenticada; senão mostra o formulário
    de login e retorna False.
    """
    if session.is_authenticated:
        return True

    with st.container():
        with st.form("login_form"):
            st.markdown("## 🌸 Painel Kokuhito")
            password = st.text_input("Senha", type="password")
            submitted = st.form_submit_button("Entrar")

            if submitted:
                if "APP_PASSWORD" not in st.secrets:
                    st.error("Senha do painel não configurada. Verifique .streamlit/secrets.toml.")
                elif session.login(password, st.secrets["APP_PASSWORD"]):
                    st.toast("Bem-vindo! 💙 Login realizado com sucesso")
                    st.rerun()
                else:
                    logger.warning("Tentativa de login com senha incorreta")
                    st.error("Hmm... senha errada 😅 Tenta de novo!")
    return False
