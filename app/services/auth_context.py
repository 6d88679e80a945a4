# app/services/auth_context.py

from collections.abc import MutableMapping


TOKEN_KEY = "access_token"
USER_ID_KEY = "user_id"
USERNAME_KEY = "username"
_KEYS = (TOKEN_KEY, USER_ID_KEY, USERNAME_KEY)


class AuthContext:
    """
    Single owner of the client's login state.

    `state` holds the live values (Streamlit's session_state in the UI, a dict
    in tests). `persist` is an optional longer-lived store such as an encrypted
    cookie jar; it is written on login, cleared on logout, and read by `restore`.
    Nothing else in the client reads or writes these keys.
    """

    def __init__(self, state: MutableMapping, persist: MutableMapping | None = None):
        self._state = state
        self._persist = persist
        self.last_reason = None

    @property
    def token(self) -> str | None:
        return self._state.get(TOKEN_KEY)

    @property
    def user_id(self) -> str | None:
        return self._state.get(USER_ID_KEY)

    @property
    def username(self) -> str | None:
        return self._state.get(USERNAME_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def login(self, token: str, user_id: str, username: str):
        values = {TOKEN_KEY: token, USER_ID_KEY: user_id, USERNAME_KEY: username}
        self._state.update(values)
        if self._persist is not None:
            self._persist.update(values)
            self._save()
        self.last_reason = None

    def logout(self, reason: str | None = None):
        for key in _KEYS:
            self._state.pop(key, None)
            if self._persist is not None and key in self._persist:
                del self._persist[key]
        if self._persist is not None:
            self._save()
        self.last_reason = reason

    def restore(self) -> bool:
        """
        Copies a persisted login into the live state. Returns True if one was found.
        """
        if self.is_authenticated or self._persist is None:
            return self.is_authenticated
        if not self._persist.get(TOKEN_KEY):
            return False
        for key in _KEYS:
            if key in self._persist:
                self._state[key] = self._persist[key]
        return True

    def _save(self):
        save = getattr(self._persist, "save", None)
        if save is not None:
            save()
