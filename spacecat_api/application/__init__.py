"""
Application layer.

Services orchestrating validation, access control, persistence and
external calls for each controller.
"""
