from mandelart.cli import main

raise SystemExit(main())
