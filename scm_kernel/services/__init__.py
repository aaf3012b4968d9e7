"""Kernel engine base classes."""

from scm_kernel.services.base import BaseService

__all__ = ["BaseService"]
