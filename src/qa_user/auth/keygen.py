"""
qa_user.auth.keygen

Signing-key generator for operators (`qa-user-keygen`).

Prints a random 512-bit key, base64-encoded, ready for `QAU_JWT_SECRET`.
"""

from __future__ import annotations

import base64
import secrets

# HS512 output size; longer keys add nothing, shorter ones weaken the MAC.
DEFAULT_KEY_BYTES = 64


def generate_signing_key(num_bytes: int = DEFAULT_KEY_BYTES) -> str:
    return base64.b64encode(secrets.token_bytes(num_bytes)).decode("ascii")


def main() -> None:
    print(generate_signing_key())


if __name__ == "__main__":
    main()
