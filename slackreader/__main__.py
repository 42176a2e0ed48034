"""Allow ``python -m slackreader``."""

from slackreader.api.cli.main import main

if __name__ == "__main__":
    main()
