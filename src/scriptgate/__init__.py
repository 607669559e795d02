"""
scriptgate - phase-gated script lifecycles

scriptgate binds script resources to a host application's startup phases
(bootstrap, registration, render), decides whether each script should be
activated, and attaches inline code and localized data exactly as often as
the host expects.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
