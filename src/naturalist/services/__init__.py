"""
Transport services.

- http.py - requests session factory and the HttpExecutor used by Client
"""
