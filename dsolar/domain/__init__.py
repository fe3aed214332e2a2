"""
Domain packages. Each one follows the same layout:
schemas (pydantic), repository (Mongo access), service (rules, HTTPException) and router.
"""
