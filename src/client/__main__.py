from src.client.cli import main

raise SystemExit(main())
