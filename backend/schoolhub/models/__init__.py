"""
SchoolHub Backend — ORM Models
================================

Importing this package registers every table with `Base.metadata`, which
Alembic autogenerate and the test suite's `create_all` rely on.

Models exported:
- User: account referenced by messages and bookmarks
- Message: direct message between two users
- SavedMessage: a user's bookmark of a message (unique per user/message pair)
"""
from schoolhub.models.user import User
from schoolhub.models.message import Message
from schoolhub.models.saved_message import SavedMessage

__all__ = ["User", "Message", "SavedMessage"]
