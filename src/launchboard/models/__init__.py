"""Decoded SpaceX API payloads."""

from .company import CompanyInfo
from .launch import LaunchRecord

__all__ = ["CompanyInfo", "LaunchRecord"]
