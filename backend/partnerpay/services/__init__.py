"""
Services package for PartnerPay.

Validation steps, pricing and the pipeline that composes them.
"""
from .credential_store import CredentialStore, get_credential_store, reset_credential_store
from .pipeline import ValidationPipeline, get_validation_pipeline

__all__ = [
    "CredentialStore",
    "get_credential_store",
    "reset_credential_store",
    "ValidationPipeline",
    "get_validation_pipeline",
]
