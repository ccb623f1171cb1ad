"""A small compiler front end: lexer, Pratt parser, syntax tree dumps and three-address code."""

__version__ = "0.1.0"