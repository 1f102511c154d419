"""
Streamlit views for the Smart Leave console.
"""

from __future__ import annotations
