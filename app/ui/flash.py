# app/ui/flash.py

FLASH_KEY = "flash_message"


def set_flash(state, message: str):
    """Queues a message for the next page that renders flashes."""
    state[FLASH_KEY] = message


def pop_flash(state):
    return state.pop(FLASH_KEY, None)
