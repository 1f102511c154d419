"""
Streamlit entrypoint for the Smart Leave console.

Usage:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    repo_root = Path(__file__).resolve().parent
    repo_root_s = str(repo_root)
    if repo_root_s not in sys.path:
        sys.path.insert(0, repo_root_s)


_ensure_repo_root_on_path()

from smart_leave.ui.app import main  # noqa: E402

if __name__ == "__main__":
    main()
