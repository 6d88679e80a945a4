# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, get_auth
from ui.blogs import blog_list_page, blog_view_page, dashboard_page
from ui.editor import editor_page, reset_form
from services.api import logout_user


load_dotenv()


def main_page():
    auth = get_auth()
    st.sidebar.markdown(f"## 👋 {auth.username}")

    if st.sidebar.button("📰 Published"):
        st.session_state["page"] = "list"
    if st.sidebar.button("🗂️ All posts"):
        st.session_state["page"] = "dashboard"
    if st.sidebar.button("📝 New post"):
        reset_form()
        st.session_state["page"] = "editor"
    if st.sidebar.button("🔓 Logout"):
        logout_user(auth)
        st.rerun()

    page = st.session_state.get("page", "list")
    if page == "view":
        blog_view_page()
    elif page == "dashboard":
        dashboard_page()
    elif page == "editor":
        editor_page()
    else:
        blog_list_page()


if not get_auth().is_authenticated:
    login_page()
else:
    main_page()
