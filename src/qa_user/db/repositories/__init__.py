"""
qa_user.db.repositories

Repository package.
"""

# Repositories are imported directly from submodules.
