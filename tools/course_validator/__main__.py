#!/usr/bin/env python3
"""Entry point for running as `python -m course_validator`."""

from course_validator.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
