"""
Pesa Path - Source Package

A personal finance app for East African savers: log deposits and
withdrawals, plan weekly or monthly budgets, pool money in SACCO
savings circles and get AI-generated financial tips.

DESIGN PRINCIPLES:
1. Firestore owns persistence and atomicity; we only group writes
2. Every form is validated before anything is written
3. The language model formats advice, it never moves money
4. Every step must be auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Pesa Path Team"
