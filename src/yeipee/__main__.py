from yeipee.cli import main

raise SystemExit(main())
