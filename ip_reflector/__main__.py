from ip_reflector.main import main

raise SystemExit(main())
