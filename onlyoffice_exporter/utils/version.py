"""Version and build context reported at start-up."""

import platform

__version__ = "0.1.0"


def version_info() -> str:
    return f"(version={__version__})"


def build_context() -> str:
    return f"(python={platform.python_version()}, implementation={platform.python_implementation()})"
