"""Run the interactive shell: python -m emdb"""

from emdb.cli.shell import main

if __name__ == "__main__":
    raise SystemExit(main())
