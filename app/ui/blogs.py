# app/ui/blogs.py

import streamlit as st
from services.api import list_published, list_all, get_blog, delete_blog
from ui.flash import pop_flash
from ui.login import get_auth


def _tags_line(blog):
    return " ".join(f"`{tag}`" for tag in blog.get("tags", []))


def blog_list_page():
    st.title("📰 Published posts")

    message = pop_flash(st.session_state)
    if message:
        st.success(message)

    blogs = list_published()
    if isinstance(blogs, dict) and blogs.get("error"):
        st.error(blogs["error"])
        return
    if not blogs:
        st.info("No posts have been published yet.")
        return

    for blog in blogs:
        with st.container(border=True):
            st.subheader(blog["title"])
            st.caption(f"Published {blog['publishedAt']}")
            if blog.get("tags"):
                st.markdown(_tags_line(blog))
            if st.button("Read", key=f"read_{blog['id']}"):
                st.session_state["view_blog_id"] = blog["id"]
                st.session_state["page"] = "view"
                st.rerun()


def blog_view_page():
    blog_id = st.session_state.get("view_blog_id")
    if not blog_id:
        st.session_state["page"] = "list"
        st.rerun()

    blog = get_blog(blog_id)
    if blog.get("error"):
        st.error(blog["error"])
        return

    st.title(blog["title"])
    st.caption(f"{blog['status']} · updated {blog['updatedAt']}")
    if blog.get("tags"):
        st.markdown(_tags_line(blog))
    st.text(blog["content"])

    if st.button("← Back"):
        st.session_state["page"] = "list"
        st.rerun()


def dashboard_page():
    st.title("🗂️ All posts")

    auth = get_auth()
    blogs = list_all(auth)
    if isinstance(blogs, dict) and blogs.get("error"):
        st.error(blogs["error"])
        if not auth.is_authenticated:
            st.rerun()
        return

    for blog in blogs:
        cols = st.columns([6, 1, 1])
        with cols[0]:
            st.markdown(f"**{blog['title']}** · {blog['status']}")
        with cols[1]:
            if st.button("✏️", key=f"edit_{blog['id']}"):
                st.session_state["editor_blog"] = blog
                st.session_state["page"] = "editor"
                st.rerun()
        with cols[2]:
            if st.button("🗑️", key=f"delete_{blog['id']}"):
                result = delete_blog(auth, blog["id"])
                if result.get("error"):
                    st.error(result["error"])
                else:
                    st.rerun()
