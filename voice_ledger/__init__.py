"""
Voice Ledger - Source Package

A personal finance ledger that turns short spoken or typed Vietnamese
phrases ("Mua cafe 35 nghìn") into categorized transactions and derives
balances and statistics from them.

DESIGN PRINCIPLES:
1. Parsing is pure and deterministic
2. Derived figures are always recomputed, never stored
3. The store trusts its callers; validation lives at the input boundary
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Voice Ledger Team"
