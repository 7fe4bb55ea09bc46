"""Resource naming conventions.

Singular forms come from ``inflect``; irregular nouns get whatever
``inflect`` returns for them.
"""

from functools import cache
from pathlib import Path

import inflect


@cache
def _engine() -> inflect.engine:
    return inflect.engine()


def singularize(name: str) -> str:
    """Return the singular form of a (plural) resource name.

    ``inflect`` answers ``False`` for words it considers singular
    already; those come back unchanged::

        singularize("photos")   -> "photo"
        singularize("session")  -> "session"
    """
    if not name:
        return name
    singular = _engine().singular_noun(name)
    return singular or name


def resource_name_from_filename(filename: str | Path) -> str:
    """Derive a resource name from a controller file name.

    The name is the leading run of the file stem before the first
    underscore::

        "photos_controller.py" -> "photos"
        "users.py"             -> "users"
        "_helpers.py"          -> ""
    """
    stem = Path(filename).stem
    return stem.split("_", 1)[0]
