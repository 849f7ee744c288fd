"""
Sigil - Signing keys and TRON address handling.
"""
