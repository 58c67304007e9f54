# Routes package init
"""
Blog API — Routes Package
===========================

Route Inventory:
    - posts.py:     POST   /api/posts          (create)
                    GET    /api/posts          (list all)
                    PUT    /api/posts/{id}     (update)
                    DELETE /api/posts/{id}     (delete)
    - health.py:    GET    /api/db-check       (database connectivity)
    - frontend.py:  GET    /{path}             (static files, index.html fallback)

Routes stay thin: parse the request, call PostService, return the result.
"""
