"""Entry point for running exoserve as a module.

Usage:
    python -m exoserve [command] [options]
"""

from exoserve.cli.main import main

if __name__ == "__main__":
    main()
