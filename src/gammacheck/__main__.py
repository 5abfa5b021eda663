from gammacheck.cli.app import main

raise SystemExit(main())
