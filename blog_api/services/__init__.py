# Services package init
"""
Blog API — Services Layer
===========================

What:  Logic sitting between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService: create/list/update/delete posts and the database check

Services take the database session as an argument, so they can be unit-tested
with a mocked session and reused by the smoke command without HTTP.
"""
