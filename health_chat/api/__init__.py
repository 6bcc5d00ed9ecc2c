"""
HTTP transport for the health chat service.
"""
