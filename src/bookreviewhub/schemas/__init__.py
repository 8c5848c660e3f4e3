from .book import Book, BookCreate
from .review import MAX_REVIEW_LENGTH, Review, ReviewCreate
from .user import LoginForm, LoginResponse, RegisterForm, Session, UserSchema

__all__ = [
    "Book",
    "BookCreate",
    "Review",
    "ReviewCreate",
    "MAX_REVIEW_LENGTH",
    "UserSchema",
    "LoginResponse",
    "Session",
    "LoginForm",
    "RegisterForm",
]
