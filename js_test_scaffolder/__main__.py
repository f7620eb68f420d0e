"""Allow running as `python -m js_test_scaffolder`."""

from js_test_scaffolder.cli import main

main()
