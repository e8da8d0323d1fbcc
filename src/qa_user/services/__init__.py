"""
qa_user.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Return `Ok` / `Err` results for expected business outcomes.
"""
