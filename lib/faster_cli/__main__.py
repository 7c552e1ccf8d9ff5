"""
faster CLI entry point for `python -m faster_cli`.
"""

from faster_cli import main

if __name__ == "__main__":
    main()
