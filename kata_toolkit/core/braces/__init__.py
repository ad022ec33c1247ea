"""Brace expansion engine.

Patterns are parsed once into a Literal/Group tree, then expanded lazily so
large combinatorial outputs are produced one string at a time.
"""
