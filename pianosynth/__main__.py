from pianosynth.main import main

raise SystemExit(main())
