# app/services/api.py

import os
import requests
from services.auth_context import AuthContext

# Base URL of the FastAPI backend
BLOG_API_URL = os.getenv("BLOG_API_URL", "http://localhost:8000")

TIMEOUT = 10


def _error_message(res) -> str:
    try:
        return res.json().get("message", f"Status {res.status_code}")
    except ValueError:
        return f"Status {res.status_code}"


def _handle_auth_failure(res, auth: AuthContext):
    """
    Drops the stored login when the backend rejects the token.
    """
    if res.status_code == 401:
        message = _error_message(res)
        auth.logout(reason="expired" if message == "Token expired" else "invalid")


# -------------------------------
# Authentication-related functions
# -------------------------------

def register_user(username, password):
    """
    Creates an account. Returns the response body or {"error": ...}.
    """
    try:
        res = requests.post(
            f"{BLOG_API_URL}/auth/register",
            json={"username": username, "password": password},
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 201:
        return res.json()
    return {"error": _error_message(res)}


def login_user(auth: AuthContext, username, password):
    """
    Logs in and stores the token in `auth`.
    """
    try:
        res = requests.post(
            f"{BLOG_API_URL}/auth/login",
            json={"username": username, "password": password},
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code != 200:
        return {"error": _error_message(res)}

    data = res.json()
    auth.login(data["token"], data["userId"], username)
    return data


def logout_user(auth: AuthContext):
    auth.logout(reason="logout")


# -------------------------
# Blog posts
# -------------------------

def _save(path, auth, title, content, tags, blog_id=None):
    payload = {"title": title, "content": content, "tags": tags}
    if blog_id:
        payload["id"] = blog_id
    try:
        res = requests.post(
            f"{BLOG_API_URL}/blogs/{path}",
            json=payload,
            headers=auth.auth_headers(),
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code in (200, 201):
        return res.json()
    _handle_auth_failure(res, auth)
    return {"error": _error_message(res)}


def save_draft(auth: AuthContext, title, content, tags="", blog_id=None):
    return _save("save-draft", auth, title, content, tags, blog_id)


def publish_blog(auth: AuthContext, title, content, tags="", blog_id=None):
    return _save("publish", auth, title, content, tags, blog_id)


def list_published():
    """
    Lists published posts, newest first.
    """
    try:
        res = requests.get(f"{BLOG_API_URL}/blogs", timeout=TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 200:
        return res.json()
    return {"error": _error_message(res)}


def list_all(auth: AuthContext):
    try:
        res = requests.get(f"{BLOG_API_URL}/blogs/all", headers=auth.auth_headers(), timeout=TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 200:
        return res.json()
    _handle_auth_failure(res, auth)
    return {"error": _error_message(res)}


def get_blog(blog_id):
    try:
        res = requests.get(f"{BLOG_API_URL}/blogs/{blog_id}", timeout=TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 200:
        return res.json()
    return {"error": _error_message(res)}


def delete_blog(auth: AuthContext, blog_id):
    try:
        res = requests.delete(
            f"{BLOG_API_URL}/blogs/{blog_id}",
            headers=auth.auth_headers(),
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 200:
        return res.json()
    _handle_auth_failure(res, auth)
    return {"error": _error_message(res)}
