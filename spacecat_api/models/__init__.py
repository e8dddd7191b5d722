"""
API data transfer objects.

Response shapes for every controller. Field names are snake_case in
Python and camelCase on the wire.
"""
