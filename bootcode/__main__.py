from __future__ import annotations

from bootcode.cli import main

raise SystemExit(main())
