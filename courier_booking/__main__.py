"""
Entry point for ``python -m courier_booking``.
"""

from .main import run

if __name__ == "__main__":
    run()
