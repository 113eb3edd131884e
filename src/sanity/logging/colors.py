"""ANSI color codes for terminal output.

All colors use the 256-color palette.

Usage:
    from sanity.logging.colors import GREEN, RED, RESET

    print(f"{GREEN}Built!{RESET}")
"""

RESET = "\033[0m"

# Status
GREEN = "\033[38;5;82m"  # Success
RED = "\033[38;5;196m"  # Failure
YELLOW = "\033[38;5;226m"  # Warnings
ORANGE = "\033[38;5;208m"  # Scripts

# Information
LIGHT_BLUE = "\033[38;5;153m"  # Context, timings
CYAN = "\033[38;5;51m"  # Info
MAGENTA = "\033[38;5;201m"  # Build

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
