"""
qa_user.api

API package for the user-account service.

Responsibilities:
- FastAPI app factory and router modules.
- Error rendering and dependency wiring.
"""


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + auth + delegation to services.
