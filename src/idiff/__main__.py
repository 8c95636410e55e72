from idiff.cli import main

raise SystemExit(main())
