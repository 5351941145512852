from denopak.cli import main

raise SystemExit(main())
