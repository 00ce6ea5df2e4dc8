"""Allow running poolgen as: python -m poolgen"""

from poolgen.cli import main

if __name__ == "__main__":
    main()
