"""Allow ``python -m docsmith``."""

from docsmith.ui.cli import main


if __name__ == "__main__":
    main()
