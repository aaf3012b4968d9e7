"""Read-only selectors."""

from scm_kernel.selectors.base import BaseSelector

__all__ = ["BaseSelector"]
