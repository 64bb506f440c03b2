from __future__ import annotations

from taskboard.cli import main

if __name__ == "__main__":
    main()
