"""
Anthaathi - Source Package

A farming companion for Tamil Nadu farmers: weather at a glance,
pest diagnosis, a farming chat assistant, market prices and a
simple expense ledger, in English or Tamil.

DESIGN PRINCIPLES:
1. Everything the user owns stays on the device
2. Missing data is an empty state, never an error screen
3. Simulated backends sit behind real interfaces
4. Every user action is logged
"""

__version__ = "1.0.0"
__author__ = "Anthaathi Team"
