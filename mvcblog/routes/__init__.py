"""
MVC Blog - Routes Package
=========================

Route Inventory:
    - posts.py:   /posts ...           HTML post resource (the controller)
    - api.py:     /api/posts, /api/categories   JSON API
    - health.py:  GET /health          service health check

Routes stay thin: pull data out of the request, call a service, pick a
template, redirect or status code. Business rules belong to services.
"""
