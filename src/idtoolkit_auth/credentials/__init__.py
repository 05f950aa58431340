"""Credentials for signing identity toolkit requests."""

from .base import BaseCredentials, EmulatorCredentials, StaticTokenCredentials
from .service_account import ServiceAccountCredentials

__all__ = [
    "BaseCredentials",
    "EmulatorCredentials",
    "ServiceAccountCredentials",
    "StaticTokenCredentials",
]
