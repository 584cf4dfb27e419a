"""CLI output utilities and formatting."""

from colorama import Fore, Style

BANNER = f"""
{Fore.YELLOW}┌──────────────────────────────────────────┐{Style.RESET_ALL}
{Fore.YELLOW}│{Style.RESET_ALL}  {Fore.CYAN}{Style.BRIGHT}gitpeek{Style.RESET_ALL}                                 {Fore.YELLOW}│{Style.RESET_ALL}
{Fore.YELLOW}│{Style.RESET_ALL}  {Fore.WHITE}Look inside a Git object database{Style.RESET_ALL}       {Fore.YELLOW}│{Style.RESET_ALL}
{Fore.YELLOW}└──────────────────────────────────────────┘{Style.RESET_ALL}
"""


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def current_branch(line: str) -> str:
    """Highlight the checked-out branch."""
    return f"{Fore.GREEN}{line}{Style.RESET_ALL}"


def object_summary(line: str) -> str:
    """Highlight the header summary of an object."""
    return f"{Fore.YELLOW}{line}{Style.RESET_ALL}"
