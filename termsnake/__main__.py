from __future__ import annotations

from termsnake.cli import main

raise SystemExit(main())
