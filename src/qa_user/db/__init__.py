"""
qa_user.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the users ORM model, engine/session setup, and the users repository.
"""
