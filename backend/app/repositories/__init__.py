"""
News Archive API — Repositories Package
=========================================

Repository Inventory:
    - article_repository.py: ArticleRepository over the MongoDB news collection

Repositories own every query and lifecycle guard; routes never touch the
collection directly.
"""
