"""
Package marker for the To-Do Note API.
It groups the HTTP layer, the account and note services, and shared helpers under one import path.
Most functionality lives in the sibling packages; this file intentionally stays lightweight.
"""
