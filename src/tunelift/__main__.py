"""Allow running TuneLift with ``python -m tunelift``."""

from tunelift.cli import main

if __name__ == "__main__":
    main()
