import sys

from dataurl_inliner.main import main


if __name__ == "__main__":
    sys.exit(main())
