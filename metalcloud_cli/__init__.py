"""MetalCloud CLI - manage bare-metal infrastructures from the terminal"""

__version__ = "1.0.0"
