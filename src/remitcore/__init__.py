# src/remitcore/__init__.py
"""
RemitCore - Cross-border Money Transfer Core

Prices outbound USD transfers with live (cached) exchange rates and a
percentage fee schedule, tracks transfer records through their simulated
settlement states, and keeps recipient banking details behind opaque
references so only masked values ever leave the core.
"""

__version__ = "0.3.0"
__author__ = "Masih Sadri"
