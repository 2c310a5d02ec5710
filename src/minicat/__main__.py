"""Allow running as ``python -m minicat``."""

from minicat.cli import main

raise SystemExit(main())
