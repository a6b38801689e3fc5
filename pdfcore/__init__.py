"""Low-level PDF building blocks: lexing, primitives, dates, cross-reference tables and paths."""

__version__ = "0.1.0"