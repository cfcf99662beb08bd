"""
Case Label Scanner Package

Recovers default human-readable labels for the cases of an enumerated type
by re-reading the source file that declares it.

ARCHITECTURAL GUARANTEE:
------------------------
The scanner performs approximate lexical analysis only:
    - Brace counting to step over an enclosing closure
    - Line classification to find the case block
    - Token splitting to pull one identifier per case line

It never builds a syntax tree and never evaluates source code.

Pairing labels with case values happens in the enhancer layer.
"""

__version__ = "0.1.0"
