"""
AcoustID Tagger - Fingerprint-based ID3 tagging with interactive review.

This package provides tools to:
- Fingerprint MP3 files with Chromaprint's fpcalc
- Look up matches on the AcoustID web service
- Reconcile the nested lookup response into tagging candidates
- Confirm, edit and write artist/title/album tags interactively
"""

__version__ = "1.0.0"
