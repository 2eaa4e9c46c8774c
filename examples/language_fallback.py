"""Language Fallback Example - Default Documents and Load Results.

Demonstrates how LocalizationClient behaves when the requested language has
no document:

1. Falling back to the default language
2. Observing fallbacks with the on_fallback callback
3. Nothing to fall back to (store cleared, keys render as $<path>)
4. Malformed documents (error propagates, previous table stays active)

Python 3.13+.
"""

from __future__ import annotations

from localkeys import (
    ClientConfig,
    DocumentParseError,
    LanguageId,
    LocalizationClient,
    LocalizationKey,
)
from localkeys.localization import FallbackInfo

DOCUMENTS = {
    "en": "shop:\n  cart: Cart\n  checkout: Checkout\n",
    "lv": "shop:\n  cart: Grozs\n",
    "xx": "shop: [broken\n",
}

CART = LocalizationKey("shop.cart")
CHECKOUT = LocalizationKey("shop.checkout")


def example_1_default_language() -> None:
    """Example 1: Requested language missing, default loaded."""
    print("=" * 60)
    print("Example 1: Default Language (et -> en)")
    print("=" * 60)

    client = LocalizationClient(ClientConfig.from_mapping(DOCUMENTS, default_language="en"))
    result = client.use(LanguageId("et"))

    print(f"  status: {result.status}")
    print(f"  requested: {result.requested_language}, loaded: {result.resolved_language}")
    print(f"  current: {client.current}")
    print(f"  cart: {client.get(CART)}")


def example_2_fallback_callback() -> None:
    """Example 2: Reporting fallbacks to the application."""
    print("\n" + "=" * 60)
    print("Example 2: on_fallback Callback")
    print("=" * 60)

    def report(info: FallbackInfo) -> None:
        print(
            f"  [fallback] no '{info.requested_language}' document, "
            f"using '{info.resolved_language}'"
        )

    client = LocalizationClient(ClientConfig.from_mapping(DOCUMENTS), on_fallback=report)
    for code in ("lv", "lt", "et"):
        client.use(LanguageId(code))

    # Partial documents do not fall back per key
    client.use(LanguageId("lv"))
    print(f"  lv checkout: {client.get(CHECKOUT)}")


def example_3_nothing_found() -> None:
    """Example 3: Neither requested nor default document exists."""
    print("\n" + "=" * 60)
    print("Example 3: No Document At All")
    print("=" * 60)

    client = LocalizationClient(ClientConfig.from_mapping(DOCUMENTS, default_language="de"))
    result = client.use(LanguageId("fr"))
    print(f"  status: {result.status}")
    print(f"  cart: {client.get(CART)}")


def example_4_malformed_document() -> None:
    """Example 4: A broken document keeps the previous language active."""
    print("\n" + "=" * 60)
    print("Example 4: Malformed Document")
    print("=" * 60)

    client = LocalizationClient(ClientConfig.from_mapping(DOCUMENTS))
    client.use(LanguageId("en"))
    try:
        client.use(LanguageId("xx"))
    except DocumentParseError as e:
        print(f"  {e.diagnostic.format_error() if e.diagnostic else e}")
    print(f"  still showing: {client.get(CART)}")


if __name__ == "__main__":
    example_1_default_language()
    example_2_fallback_callback()
    example_3_nothing_found()
    example_4_malformed_document()
