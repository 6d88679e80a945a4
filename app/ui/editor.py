# app/ui/editor.py

import streamlit as st
from services.api import save_draft, publish_blog
from ui.flash import set_flash
from ui.login import get_auth


def _load_into_form():
    blog = st.session_state.pop("editor_blog", None)
    if blog is None:
        return
    st.session_state["editor_id"] = blog["id"]
    st.session_state["editor_title"] = blog["title"]
    st.session_state["editor_content"] = blog["content"]
    st.session_state["editor_tags"] = ",".join(blog.get("tags", []))


def reset_form():
    for key in ("editor_id", "editor_title", "editor_content", "editor_tags"):
        st.session_state.pop(key, None)


def _save(action):
    auth = get_auth()
    title = st.session_state.get("editor_title", "")
    content = st.session_state.get("editor_content", "")
    tags = st.session_state.get("editor_tags", "")
    result = action(auth, title, content, tags, blog_id=st.session_state.get("editor_id"))
    if not result.get("error"):
        st.session_state["editor_id"] = result["blog"]["id"]
    return result


def autosave():
    """Saves a draft whenever a field changes, once title and content are both filled."""
    title = st.session_state.get("editor_title", "")
    content = st.session_state.get("editor_content", "")
    if not title.strip() or not content.strip():
        return
    result = _save(save_draft)
    st.session_state["editor_message"] = "Auto-save failed" if result.get("error") else "Auto-saved"


def editor_page():
    _load_into_form()
    st.title("📝 Edit post" if st.session_state.get("editor_id") else "📝 New post")

    st.text_input("Title", key="editor_title", on_change=autosave)
    st.text_area("Content", key="editor_content", height=300, on_change=autosave)
    st.text_input("Tags (comma separated)", key="editor_tags", on_change=autosave)

    cols = st.columns(2)
    with cols[0]:
        if st.button("Save draft"):
            result = _save(save_draft)
            st.session_state["editor_message"] = result.get("error") or result["message"]
    with cols[1]:
        if st.button("Publish", type="primary"):
            result = _save(publish_blog)
            if result.get("error"):
                st.session_state["editor_message"] = f"Failed to publish: {result['error']}"
            else:
                reset_form()
                set_flash(st.session_state, "Published successfully")
                st.session_state["page"] = "list"
                st.rerun()

    message = st.session_state.pop("editor_message", None)
    if message:
        st.caption(message)

    if not get_auth().is_authenticated:
        st.rerun()
