"""Quickstart example for msgcatalog.

Demonstrates loading catalogs, singular and plural lookups, domains,
placeholder substitution and web escaping.
"""

import json
import logging
import tempfile
from pathlib import Path

from msgcatalog import DomainLoadError, Locale, PathCatalogLoader, plural_forms_for_locale

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

# Example 1: Default domain
print("=" * 50)
print("Example 1: Default Domain")
print("=" * 50)

locale = Locale(
    "fr_FR",
    "main",
    {
        "": {"nplurals": "1", "plural": "(n > 1)"},
        "Search": "Recherche",
        "You have one mail": "Vous avez un courriel",
        "You have %d mails": ["Vous avez %d courriels"],
    },
)

print(locale.gettext("Search"))
# Output: Recherche

print(locale.ngettext("You have one mail", "You have %d mails", 1))
# Output: Vous avez un courriel

print(locale.ngettext("You have one mail", "You have %d mails", 6, 6))
# Output: Vous avez 6 courriels

print(locale.gettext("Not translated yet"))
# Output: Not translated yet

# Example 2: Domains loaded from disk
print("\n" + "=" * 50)
print("Example 2: Domains From Disk")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmp:
    navbar = Path(tmp) / "fr_FR" / "navbar.json"
    navbar.parent.mkdir()
    navbar.write_text(
        json.dumps({"": {"nplurals": "0"}, "Logout": "Déconnexion"}, ensure_ascii=False),
        encoding="utf-8",
    )

    locale.load_domain_from(PathCatalogLoader(f"{tmp}/{{locale}}"), "navbar")

print(locale.dgettext("navbar", "Logout"))
# Output: Déconnexion

print(sorted(locale.loaded_domains))
# Output: ['main', 'navbar']

# Example 3: Plural rules from Babel
print("\n" + "=" * 50)
print("Example 3: Plural Rules From Babel")
print("=" * 50)

forms = plural_forms_for_locale("ru")
print(forms)

russian = Locale(
    "ru",
    "files",
    {
        "": forms.as_metadata(),
        "%d files": ["%d файл", "%d файла", "%d файлов"],
    },
)
for count in (1, 3, 5, 21):
    print(russian.ngettext("One file", "%d files", count, count))
# Output: 1 файл / 3 файла / 5 файлов / 21 файл

# Example 4: Validation errors
print("\n" + "=" * 50)
print("Example 4: Catalog Validation")
print("=" * 50)

try:
    locale.load_domain("broken", {"": {"nplurals": "2", "plural": "(n > 1)"}})
except DomainLoadError as e:
    print(e)
# Output:
# error[PLURAL_ARITY_MISMATCH]: The 'nplurals' value (2) doesn't match ...
#   = domain: broken
#   = plural: (n > 1)
#   = help: Count the '?'-separated pieces of the 'plural' expression

# Example 5: HTML output
print("\n" + "=" * 50)
print("Example 5: HTML Output")
print("=" * 50)

web = Locale("en", "main", {"Hi %s": "Hi <b>%s</b>"}, use_custom_plural_forms=False)
web.set_format_for_web(True)
print(web.gettext("Hi %s", "<script>"))
# Output: Hi &lt;b&gt;&lt;script&gt;&lt;/b&gt;

web.set_format_for_web_include_placeholders(False)
print(web.gettext("Hi %s", "<i>Ann</i>"))
# Output: Hi &lt;b&gt;<i>Ann</i>&lt;/b&gt;
