"""
Postboard: Repositories Package
===============================

What:  Persistence layer between route handlers and the database session.
How:   Each repository wraps one AsyncSession and exposes document-store style
       operations (create, find, find-and-update, find-and-remove). Storage
       failures surface as RepositoryError; a missing document is `None`.

Repository Inventory:
    - PostRepository: CRUD for Post documents
"""
