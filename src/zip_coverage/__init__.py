"""
Columbus ZIP Coverage.

Service brand availability by ZIP code for Columbus, Ohio: ledger
ingestion, ZIP boundary acquisition, and map/report deliverables.
"""

__version__ = "1.0.0"
