"""
Cabinet Kiné

A FastAPI-based management service for a small therapy practice: weekly
scheduling, patient records, a financial ledger and user administration,
with role-based access for administrators, secretaries and therapists.
"""

__version__ = "1.0.0"
