"""
MVC Blog - Services Layer
=========================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService:     list / show / create / update / delete posts,
                       validation and not-found rules
    - CategoryService: list / show / create categories

Services are stateless singletons; the AsyncSession is passed into every
call, which lets tests substitute a mock or a throwaway SQLite session.
"""
