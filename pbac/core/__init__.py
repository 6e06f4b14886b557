"""
pbac core: identifiers, wildcard-aware documents and matching.
"""
