"""
ZenStudent - supportive companion backend for students.

Chat with risk screening and trusted-contact escalation, a bounded
mood ledger, and timed breathing and meditation exercises.
"""

__version__ = "0.1.0"
