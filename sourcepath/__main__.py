"""Entry point for running sourcepath as a module.

This allows the package to be executed as:
    python -m sourcepath

It delegates to the CLI main function.
"""

from sourcepath.cli.main import main

if __name__ == "__main__":
    main()
