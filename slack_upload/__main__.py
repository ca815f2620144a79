"""Package entry point for ``python -m slack_upload``."""

from slack_upload.cli import main

if __name__ == "__main__":
    main()
