"""
Core domain layer.

Pure helpers and the exception hierarchy shared by services and routers.
"""
