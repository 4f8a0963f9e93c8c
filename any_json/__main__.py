"""Package entry point for ``python -m any_json``.

Delegates to the CLI's main(); ``python -m any_json --help`` prints usage.
"""

from any_json.cli import main

if __name__ == "__main__":
    main()
