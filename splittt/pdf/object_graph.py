"""
Reachability walk over the PyPDF2 object graph.

A PDF page is the root of a graph of indirect objects: content streams,
resource dictionaries, fonts, images, annotations. The walk below follows
every indirect reference reachable from one page and returns the resolved
objects keyed by (object number, generation). Back-pointers into the page
tree are not followed, otherwise every page would reach the whole document.
"""

from typing import Dict, Optional, Tuple

from PyPDF2.generic import ArrayObject, DictionaryObject, IndirectObject, NullObject

ObjectKey = Tuple[int, int]

LINK_KEYS = ("/Dest", "/A")

# /Parent links a page (or an outline/annotation) back to its tree,
# /P links an annotation back to its page.
BACK_POINTER_KEYS = frozenset({"/Parent", "/P"})


class UnreadableObject(Exception):
    def __init__(self, key: ObjectKey, cause: Exception = None):
        self.key = key
        self.cause = cause
        message = f"object {key[0]} {key[1]} R is unreadable"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


def _resolve(ref: IndirectObject):
    key = (ref.idnum, ref.generation)
    try:
        obj = ref.get_object()
    except Exception as e:
        raise UnreadableObject(key, e) from e
    if obj is None or isinstance(obj, NullObject):
        raise UnreadableObject(key)
    return obj


def _is_page(obj) -> bool:
    return isinstance(obj, DictionaryObject) and obj.get("/Type") == "/Page"


def collect_reachable(page: DictionaryObject) -> Dict[ObjectKey, object]:
    """
    Return every indirect object reachable from ``page``.

    Other pages reached through links are targets, not dependencies, and are
    neither recorded nor walked. Raises UnreadableObject for a reference that
    cannot be resolved.
    """
    reached: Dict[ObjectKey, object] = {}
    skipped = set()
    stack = [page]

    while stack:
        obj = stack.pop()

        if isinstance(obj, IndirectObject):
            key = (obj.idnum, obj.generation)
            if key in reached or key in skipped:
                continue
            resolved = _resolve(obj)
            if _is_page(resolved):
                skipped.add(key)
                continue
            reached[key] = resolved
            stack.append(resolved)
        elif isinstance(obj, DictionaryObject):
            # StreamObject is a DictionaryObject, its data holds no references
            for name in obj:
                if name in BACK_POINTER_KEYS:
                    continue
                stack.append(obj.raw_get(name))
        elif isinstance(obj, ArrayObject):
            stack.extend(obj)

    return reached


def link_target(annotation: DictionaryObject, key: str) -> Optional[IndirectObject]:
    """
    Page reference of an explicit destination held under ``key``.

    ``key`` is "/Dest" or "/A"; for "/A" only GoTo actions count. Named
    destinations and remote targets give None.
    """
    if key not in annotation:
        return None
    value = annotation.raw_get(key).get_object()
    if key == "/A":
        if not isinstance(value, DictionaryObject) or value.get("/S") != "/GoTo":
            return None
        if "/D" not in value:
            return None
        value = value.raw_get("/D").get_object()
    if isinstance(value, ArrayObject) and len(value) > 0:
        target = value[0]
        if isinstance(target, IndirectObject):
            return target
    return None


def shared_objects(graphs) -> Dict[ObjectKey, int]:
    """
    Count, for objects reached from more than one page, how many pages use them.
    """
    usage: Dict[ObjectKey, int] = {}
    for graph in graphs:
        for key in graph:
            usage[key] = usage.get(key, 0) + 1
    return {key: count for key, count in usage.items() if count > 1}
