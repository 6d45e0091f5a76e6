import sys

from cvmaker.main import main


if __name__ == "__main__":
    sys.exit(main())
