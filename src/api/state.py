import os
from typing import Optional

from storage.todo_store import TodoStore

TODO_STORE_BACKEND = os.getenv("TODO_STORE", "memory").strip().lower()

# Initialized at startup (or lazily on first use when startup hooks did not run)
todo_store: Optional[TodoStore] = None
