"""Thread Safety Example - Switching Languages While Other Threads Read.

ResolutionStore keeps its table and cache as one snapshot that is replaced
atomically, so readers never mix text from two languages. Lookups take no
lock; LocalizationClient.use() serializes language switches.

Python 3.13+.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from localkeys import ClientConfig, LanguageId, LocalizationClient, LocalizationKey

DOCUMENTS = {
    "en": "hud:\n  $: HUD\n  health: Health\n  ammo: Ammo\n",
    "de": "hud:\n  $: HUD\n  health: Gesundheit\n  ammo: Munition\n",
}
CONSISTENT = {("Health", "Ammo"), ("Gesundheit", "Munition")}


def main() -> None:
    client = LocalizationClient(ClientConfig.from_mapping(DOCUMENTS))
    client.use(LanguageId("en"))
    health, ammo = LocalizationKey("hud.health"), LocalizationKey("hud.ammo")
    stop = threading.Event()

    def reader() -> int:
        reads = 0
        while not stop.is_set():
            # Each get() sees one snapshot; a pair may straddle a switch.
            client.get(health)
            client.get(ammo)
            reads += 2
        return reads

    with ThreadPoolExecutor(max_workers=4) as pool:
        futures = [pool.submit(reader) for _ in range(4)]
        for i in range(200):
            client.use(LanguageId("de" if i % 2 else "en"))
        stop.set()
        total = sum(future.result() for future in futures)

    pair = (client.get(health), client.get(ammo))
    print(f"{total} lookups during 200 switches; final pair {pair}")
    assert pair in CONSISTENT
    print(client.store.get_stats())


if __name__ == "__main__":
    main()
