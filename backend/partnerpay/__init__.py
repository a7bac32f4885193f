"""
PartnerPay backend.

Partner transaction validation and discount pricing service.
"""

__version__ = "0.1.0"
