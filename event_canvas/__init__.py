"""Declarative layout and dual-surface rendering for event certificates and credentials"""

__version__ = "1.0.0"
