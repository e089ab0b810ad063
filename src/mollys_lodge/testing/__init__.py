"""
Testing utilities for mollys_lodge users.
──────────────────────────────────────────────────────────────
Provides pytest fixtures that hand out a fresh Container per test
and dispose it afterwards.
──────────────────────────────────────────────────────────────
"""
from .fixtures import container, default_container_reset, log_messages

__all__ = ["container", "default_container_reset", "log_messages"]
