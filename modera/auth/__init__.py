"""Credential gating."""

from .gate import AuthGate, AuthState, CredentialCapability

__all__ = ["AuthGate", "AuthState", "CredentialCapability"]
