"""
Warden Analyzers
=================

Classification of parsed access point records.

Modules:
    classifier -- Authorized / unauthorized verdict per access point
"""

from warden.analyzers.classifier import Classifier, classify

__all__ = [
    "Classifier",
    "classify",
]
