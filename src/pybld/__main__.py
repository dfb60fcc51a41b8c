from pybld.cli import main

raise SystemExit(main())
