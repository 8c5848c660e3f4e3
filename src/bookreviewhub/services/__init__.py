from .catalog import (
    add_book,
    delete_book,
    delete_review,
    login,
    logout,
    register,
    submit_review,
)

__all__ = [
    "add_book",
    "delete_book",
    "delete_review",
    "login",
    "logout",
    "register",
    "submit_review",
]
