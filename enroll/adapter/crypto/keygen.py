"""Print a fresh encryption key for ENCRYPTION__KEY."""

import sys

from enroll.adapter.crypto.aead import AeadCipher


def main() -> int:
    print(AeadCipher.generate_key())
    return 0


if __name__ == "__main__":
    sys.exit(main())
