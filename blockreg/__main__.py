from .compile import main

raise SystemExit(main())
