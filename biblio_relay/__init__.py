"""
CORS relay and SPARQL query helpers for bibliographic endpoints (KNL, JPSearch, NDL).
"""

__version__ = "0.1.0"
