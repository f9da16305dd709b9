"""Values, syntax tree, output records and builtins for a Pine-style trading script language."""

__version__ = "0.1.0"