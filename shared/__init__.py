"""
Shared Kernel

Building blocks used by every domain app: the JSON response envelope and
the error taxonomy rendered by the DRF exception handler.
"""
