"""A multi-stack virtual machine with a standard library of stack words."""

__version__ = "0.1.0"
__all__ = ["machine", "printing", "arith", "floatmath", "strings", "values", "timestamp", "stdlib"]