"""Tests for Locale with thread_safe=True.

Verifies that concurrent lookups and reloads never observe a partially
installed domain and that lookups stay total under contention.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from msgcatalog import Locale


def _catalog(version: int) -> dict[str, object]:
    return {
        "": {"nplurals": "1", "plural": "(n > 1)"},
        "Version": f"v{version}",
        "One item": f"one item v{version}",
        "%d items": [f"%d items v{version}"],
    }


class TestThreadSafeLocale:
    """Test thread_safe=True."""

    def test_flag(self) -> None:
        """thread_safe is exposed."""
        assert Locale("fr", "main", _catalog(0), thread_safe=True).thread_safe is True

    def test_concurrent_lookups(self) -> None:
        """Many threads resolve concurrently with identical results."""
        locale = Locale("fr", "main", _catalog(1), thread_safe=True)

        def resolve(n: int) -> str:
            return locale.ngettext("One item", "%d items", n, n)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(resolve, [5] * 200))

        assert set(results) == {"5 items v1"}

    def test_lookups_during_reloads(self) -> None:
        """Readers only ever see complete catalogs."""
        locale = Locale("fr", "main", _catalog(0), thread_safe=True)
        stop = threading.Event()
        seen: list[tuple[str, str]] = []

        def read() -> None:
            while True:
                version_text = locale.gettext("Version")
                plural = locale.ngettext("One item", "%d items", 2, 2)
                seen.append((version_text, plural))
                if stop.is_set():
                    break

        readers = [threading.Thread(target=read) for _ in range(4)]
        for reader in readers:
            reader.start()

        for version in range(1, 50):
            locale.load_domain("main", _catalog(version))
        stop.set()
        for reader in readers:
            reader.join()

        assert seen
        for version_text, plural in seen:
            assert version_text.startswith("v")
            assert plural.startswith("2 items v")
        assert locale.gettext("Version") == "v49"

    def test_setters_under_contention(self) -> None:
        """Toggling web formatting while resolving never raises."""
        locale = Locale("fr", "main", {**_catalog(0), "Tag": "<b>"}, thread_safe=True)

        def toggle(i: int) -> bool:
            return locale.set_format_for_web(i % 2 == 0)

        def resolve(_: int) -> str:
            return locale.gettext("Tag")

        with ThreadPoolExecutor(max_workers=8) as executor:
            toggles = executor.map(toggle, range(100))
            results = list(executor.map(resolve, range(100)))
            list(toggles)

        assert set(results) <= {"<b>", "&lt;b&gt;"}
