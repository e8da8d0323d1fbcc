"""
qa_user.auth

Authentication/authorization package.

Responsibilities:
- Password hashing (bcrypt) and JWT minting/verification.
- Registration and password-change credential rules.
- The per-request authentication gate and its FastAPI dependencies.
"""
