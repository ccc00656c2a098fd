"""
Bundled substitutors.

Each substitutor has the signature `(captured, context) -> Optional[str]` and
reports a missing value as None so the token is left in place.
"""

import json
import os
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence


def stringify(value: Any) -> Optional[str]:
    """
    Render a context value as replacement text.

    Booleans become 'true'/'false', numbers use str(), strings pass through,
    None is absent and anything else is rendered as JSON.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, str):
        return value
    else:
        return json.dumps(value)


def _resolve_path(obj: Any, path: List[str]) -> Optional[Any]:
    """
    Resolve a path within nested mappings.

    Args:
        obj: Object to traverse
        path: Path parts to follow

    Returns:
        Resolved value or None
    """
    current = obj
    for part in path:
        if isinstance(current, Mapping):
            current = current.get(part)
            if current is None:
                return None
        else:
            return None
    return current


def lookup(captured: str, context: Any) -> Optional[str]:
    """
    Look up `captured` in a mapping context.

    A key containing dots is tried whole first, then as a path such as
    'request.body' -> context['request']['body'].
    """
    if not isinstance(context, Mapping):
        return None
    if captured in context:
        return stringify(context[captured])
    parts = captured.split('.')
    if len(parts) < 2 or not all(parts):
        return None
    return stringify(_resolve_path(context, parts))


def positional(captured: str, context: Any) -> Optional[str]:
    """Index into a sequence context with a decimal capture, e.g. '*[0]'."""
    if not (captured.isascii() and captured.isdigit()):
        return None
    if isinstance(context, Mapping):
        # Mapping contexts may carry their positional values under 'args'
        context = context.get('args')
    if not isinstance(context, Sequence) or isinstance(context, str):
        return None
    index = int(captured)
    if index >= len(context):
        return None
    return stringify(context[index])


def environment(captured: str, context: Any) -> Optional[str]:
    """Read `captured` from the process environment; the context is ignored."""
    return os.environ.get(captured)


BUILTIN_SUBSTITUTORS: Dict[str, Callable[[str, Any], Optional[str]]] = {
    'lookup': lookup,
    'positional': positional,
    'environment': environment,
}
