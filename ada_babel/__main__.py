"""Entry point for `python -m ada_babel`."""

from dotenv import load_dotenv

load_dotenv()

from ada_babel.cli import main

if __name__ == "__main__":
    main()
