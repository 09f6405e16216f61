"""
News Archive API — Routes Package
===================================

Route Inventory:
    - news.py:    /api/news resource (list, archived, init, create, archive, delete)
    - health.py:  GET /health

Routes are thin: they call the repository and shape the response. Status
codes for failures come from the exception handlers in ``main.py``.
"""
