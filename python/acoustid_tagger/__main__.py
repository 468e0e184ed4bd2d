"""Allow running as ``python -m acoustid_tagger``."""

from acoustid_tagger.main import main

if __name__ == "__main__":
    main()
