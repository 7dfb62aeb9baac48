"""Utility helpers package for IDs and JSON document I/O.

Modules here provide time-sortable ID generation and atomic JSON
persistence used by the document stores.
"""
