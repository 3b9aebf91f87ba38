from pixel_says.cli import main

raise SystemExit(main())
