# app/ui/login.py

import os
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from services.api import login_user, register_user
from services.auth_context import AuthContext

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD", "change-me")

cookies = EncryptedCookieManager(prefix="blog-editor/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def get_auth() -> AuthContext:
    """
    The one AuthContext for this browser session, backed by session_state and cookies.
    """
    if "auth" not in st.session_state:
        auth = AuthContext(st.session_state, persist=cookies)
        auth.restore()
        st.session_state["auth"] = auth
    return st.session_state["auth"]


def login_page():
    st.title("🔐 Login")

    auth = get_auth()
    if auth.last_reason == "expired":
        st.warning("Your session expired. Please log in again.")

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form(auth)


def show_login_form(auth: AuthContext):
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        if not username.strip() or not password.strip():
            st.error("Username and password are required")
            return
        with st.spinner("Logging in..."):
            result = login_user(auth, username, password)
        if result.get("error"):
            st.error(f"❌ Login failed: {result['error']}")
        else:
            st.success("✅ Login successful!")
            st.rerun()

    if st.button("Sign up"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Sign up")

    new_user = st.text_input("New username", key="new_user")
    new_pass = st.text_input("New password", type="password", key="new_pass")

    if st.button("Create account"):
        with st.spinner("Creating account..."):
            result = register_user(new_user, new_pass)
        if result.get("error"):
            st.error(f"❌ Sign up failed: {result['error']}")
        else:
            st.success("🎉 Account created! Please log in.")
            st.session_state["show_register"] = False
            st.rerun()

    if st.button("← Back to login"):
        st.session_state["show_register"] = False
        st.rerun()
