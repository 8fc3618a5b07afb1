# file: opencnam/__main__.py
from __future__ import annotations

from opencnam.cli import main

if __name__ == "__main__":
    main()
