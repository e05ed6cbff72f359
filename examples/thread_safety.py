"""Thread Safety Example - Lookups while the locale changes.

LocaleResolver installs a new selection as one unit under the write side
of its RWLock. Lookups hold the read side, so every get_text() answers
from the complete previous selection or the complete new one.

Demonstrates:
1. Concurrent lookups through a ThreadPoolExecutor
2. Switching locale while reader threads are running

Python 3.13+.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from pocatalog import LocaleResolver, MemoryAssetProvider, ResolverConfig

PROVIDER = MemoryAssetProvider({
    "po/fr.po": '"Language: fr\\n"\nmsgid "HELLO"\nmsgstr "Bonjour"',
    "po/de.po": '"Language: de\\n"\nmsgid "HELLO"\nmsgstr "Hallo"',
    "po/en.po": '"Language: en\\n"\nmsgid "HELLO"\nmsgstr "Hello"',
})


def example_1_concurrent_reads() -> None:
    """Example 1: Many threads reading one selection."""
    print("=" * 60)
    print("Example 1: Concurrent reads")
    print("=" * 60)

    resolver = LocaleResolver(PROVIDER, ResolverConfig(fallback_locale="en"))
    resolver.select_locale("fr")

    with ThreadPoolExecutor(max_workers=4) as executor:
        futures = [executor.submit(resolver.get_text, "HELLO") for _ in range(8)]
        results = {future.result() for future in as_completed(futures)}
    print(f"  distinct results: {sorted(results)}")


def example_2_switch_under_load() -> None:
    """Example 2: Switching locale while readers run."""
    print("\n" + "=" * 60)
    print("Example 2: Locale switch under load")
    print("=" * 60)

    resolver = LocaleResolver(PROVIDER, ResolverConfig(fallback_locale="en"))
    resolver.select_locale("fr")
    stop = threading.Event()
    seen: set[str] = set()
    seen_lock = threading.Lock()

    def reader() -> None:
        while not stop.is_set():
            text = resolver.get_text("HELLO")
            with seen_lock:
                seen.add(text)

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for locale in ("de", "fr", "de", "en"):
        resolver.select_locale(locale)
        print(f"  [SWITCH] now {resolver.current_locale()}")
    stop.set()
    for t in threads:
        t.join()

    print(f"  readers saw: {sorted(seen)}")


if __name__ == "__main__":
    example_1_concurrent_reads()
    example_2_switch_under_load()

    print("\n" + "=" * 60)
    print("[SUCCESS] All thread safety examples complete!")
    print("=" * 60)
