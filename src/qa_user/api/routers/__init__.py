"""
qa_user.api.routers

HTTP routers.
"""
