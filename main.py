"""cdplog: parse, correlate and inspect browser-automation protocol logs."""

from cdplog.cli import main

if __name__ == "__main__":
    main()
