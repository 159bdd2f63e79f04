"""Canonical URL path cleaning."""


def clean_path(p: str) -> str:
    """Return the canonical URL path for *p*.

    Multiple slashes collapse to one, ``.`` elements are dropped, inner ``..``
    elements remove the element before them, and ``..`` at the root is
    ignored. A trailing slash, or a trailing ``.`` element, is kept as a
    trailing slash. An empty result becomes ``"/"``.
    """
    if not p:
        return "/"

    trailing = len(p) > 1 and p.endswith("/")
    parts: list[str] = []
    segments = p.split("/")
    last_index = len(segments) - 1

    for index, segment in enumerate(segments):
        if segment == "":
            continue
        if segment == ".":
            if index == last_index:
                trailing = True
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)

    result = "/" + "/".join(parts)
    if trailing and parts:
        result += "/"
    return result