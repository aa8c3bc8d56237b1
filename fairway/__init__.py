"""
Package marker for the Fairway golf competition backend.
It groups the resource access layer, feature services, and HTTP adapter under one import path.
Most functionality lives in the sibling packages; this file intentionally stays lightweight.
"""
