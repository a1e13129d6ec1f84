"""Repository implementations for infrastructure layer."""

from .access_policy_repository import AccessPolicyRepository

__all__ = ["AccessPolicyRepository"]
