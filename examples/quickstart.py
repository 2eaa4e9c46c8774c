"""Quickstart example for localkeys.

This example demonstrates basic usage of localkeys: authoring a nested YAML
document, selecting a language and resolving typed keys.

Note: In an application the key constants are generated from the documents.
Here they are written out by hand.
"""

import logging
import tempfile
from pathlib import Path

from localkeys import ClientConfig, LanguageId, LocalizationClient, LocalizationKey
from localkeys.syntax import flatten_document

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# Example 1: Flattening a document
print("=" * 50)
print("Example 1: Flattening")
print("=" * 50)

result = flatten_document("""
UI:
  menu:
    $: Main Menu
    start: Start Game
    options menu: Options
  credits:
    - Alice
    - Bob
""")

for path, text in result.table.items():
    print(f"{path} = {text}")
# Output:
# UI.menu = Main Menu
# UI.menu.start = Start Game
# UI.menu.options_menu = Options
# UI.credits.0 = Alice
# UI.credits.1 = Bob

# Example 2: Resolving keys from a directory of language documents
print("\n" + "=" * 50)
print("Example 2: Resolving Keys")
print("=" * 50)


class langs:
    en = LanguageId("en")
    lv = LanguageId("lv")


class UI:
    menu = LocalizationKey("UI.menu")
    start = menu.child("start")
    quit = menu.child("quit")


with tempfile.TemporaryDirectory() as tmpdir:
    base = Path(tmpdir)
    (base / "lang_en.yaml").write_text(
        "UI:\n  menu:\n    $: Main Menu\n    start: Start Game\n    quit: Quit\n",
        encoding="utf-8",
    )
    (base / "lang_lv.yaml").write_text(
        "UI:\n  menu:\n    $: Galvenā izvēlne\n    start: Sākt spēli\n",
        encoding="utf-8",
    )

    client = LocalizationClient(ClientConfig.from_directory(base))
    print("Available:", [lang.display_name() for lang in client.available_languages()])
    # Output: Available: ['English', 'latviešu']

    client.use(langs.en)
    print(client.get(UI.menu), "/", client.get(UI.start), "/", client.get(UI.quit))
    # Output: Main Menu / Start Game / Quit

    client.use(langs.lv)
    print(client.get(UI.menu), "/", client.get(UI.start), "/", client.get(UI.quit))
    # Output: Galvenā izvēlne / Sākt spēli / $UI.menu.quit

# Example 3: Missing text is visible, never an exception
print("\n" + "=" * 50)
print("Example 3: Reference Form")
print("=" * 50)

print(client.get(LocalizationKey("UI.menu.missing")))
# Output: $UI.menu.missing
print(repr(client.get(LocalizationKey(""))))
# Output: ''
print(client.store.get_stats())

print("\n" + "=" * 50)
print("Quickstart complete!")
print("=" * 50)
