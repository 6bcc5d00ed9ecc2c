"""
Health Chat Service.

Measurement logging, a rule-based health assistant and per-metric trend
insights, exposed over a FastAPI application (see health_chat.main).
"""

__version__ = "1.0.0"
