"""
Basic nonceguard usage example.

This example demonstrates the fundamental nonce operations:
- Creating a manager
- Issuing a nonce for a form
- Verifying the submitted value
- Expiry handled through an injectable clock
"""

import logging

from nonceguard import NonceManager, MemoryStorage, ManualClock


def basic_example():
    """Demonstrate basic nonceguard usage"""
    print("Basic nonceguard Example")
    print("=" * 30)

    # 1. Create manager over in-memory storage
    clock = ManualClock()
    nonces = NonceManager("example-application-secret", MemoryStorage(), clock=clock)
    print("✓ Created nonce manager")

    # 2. Issue a nonce to embed in a form
    token = nonces.create("contact-form", expiry=300)
    print(f"✓ Nonce issued: {token}")

    # 3. Verify without consuming, then consume
    print(f"✓ Peek verification: {nonces.verify('contact-form', token, clear=False)}")
    print(f"✓ Verification: {nonces.verify('contact-form', token)}")
    print(f"✓ Replay rejected: {not nonces.verify('contact-form', token)}")

    # 4. Expiry
    token = nonces.create("search-form", expiry=30)
    clock.advance(30)
    print(f"✓ Expired nonce usable: {nonces.has('search-form')}")
    print(f"✓ Expired nonce still stored: {nonces.get('search-form', allow_expired=True) == token}")

    # 5. Cleanup
    nonces.delete("search-form")
    print("✓ Expired nonce deleted")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    basic_example()
