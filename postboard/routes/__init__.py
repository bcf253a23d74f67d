# Routes package init
"""
Postboard: API Routes Package
=============================

Route Inventory:
    - posts.py:   POST   /api/posts
                  GET    /api/posts
                  GET    /api/posts/{post_id}
                  DELETE /api/posts/{post_id}
                  PATCH  /api/posts/{post_id}
    - health.py:  GET    /health
    - dependencies.py: id check and repository injection shared by posts.py

Routes stay thin: extract input, call the repository once, pick the status
code. Storage details live in postboard.repositories.
"""
