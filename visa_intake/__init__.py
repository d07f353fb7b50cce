"""Visa application intake wizard.

The package exposes the version for runtime display; the wizard itself lives
in ``core`` (draft store, validation, step flow) and ``ui`` (Streamlit pages).
"""

__all__ = ["__version__"]

# Keep in sync with the version declared in ``pyproject.toml``
__version__ = "0.3.0"
