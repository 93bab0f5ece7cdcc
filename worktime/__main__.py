"""
Entry point for ``python -m worktime``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
